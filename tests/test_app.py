import logging

import pytest

import amazon_store
from amazon_store import Application, DatabaseError, Menu, MenuOption, main, parse_args, read_choice


def test_read_choice_reprompts(scripted_input, capsys):
    scripted_input("abc", "", "4")
    assert read_choice() == 4
    assert capsys.readouterr().out.count("your input is invalid!") == 2


def test_menu_unrecognized_choice(scripted_input, capsys):
    menu = Menu("test menu", [MenuOption(1, "one", lambda: "ran")])
    scripted_input("5")
    assert menu.prompt() is None
    assert "unrecognized choice!" in capsys.readouterr().out
    scripted_input("1")
    assert menu.prompt() == "ran"


def test_database_error_stops_only_the_action(capsys):
    def broken():
        raise DatabaseError("disk on fire")
    assert MenuOption(1, "broken", broken).execute() is None
    assert "an error occurred: disk on fire" in capsys.readouterr().err


def test_other_errors_propagate():
    def broken():
        raise RuntimeError("bug")
    with pytest.raises(RuntimeError):
        MenuOption(1, "broken", broken).execute()


def test_user_menu_lists_manager_actions(db, capsys):
    Application(db).user_menu.show()
    out = capsys.readouterr().out
    assert "place product supply request to warehouse" in out
    assert out.count("(managers)") == 5
    assert "log out" in out


def test_full_customer_session(db, make_store, scripted_input, capsys):
    make_store(1, 12, 12)
    app = Application(db)
    scripted_input(
        "1", "bob", "pw", "10", "10",   # create user
        "2", "bob", "pw",               # log in
        "1",                            # view stores
        "5",                            # update product, refused
        "20",                           # log out
        "9",                            # exit
    )
    app.run()
    captured = capsys.readouterr()
    assert "user successfully created!" in captured.out
    assert "logged in as" in captured.out
    assert "store id: 1" in captured.out
    assert "invalid permissions." in captured.err
    assert "logged out user" in captured.out
    assert app.account_manager.current_user is None
    assert not app.running


def test_failed_login_stays_on_main_menu(db, scripted_input, capsys):
    app = Application(db)
    scripted_input("2", "nobody", "nothing", "9")
    app.run()
    assert "invalid name or password" in capsys.readouterr().out
    assert not app.running


def test_end_of_input_leaves_loop(db, scripted_input):
    app = Application(db)
    scripted_input("7")
    app.run()
    assert app.running


def test_parse_args_defaults(monkeypatch):
    monkeypatch.delenv("AMAZON_STORE_LOG_LEVEL", raising=False)
    args = parse_args([])
    assert args.database == amazon_store.DEFAULT_DATABASE
    assert args.log_level == "INFO"
    assert not args.no_seed


def test_main_runs_and_disconnects(tmp_path, scripted_input, capsys, reset_logger):
    log_file = tmp_path / "store.log"
    scripted_input("9")
    main([str(tmp_path / "store.db"), "--log-file", str(log_file), "--log-level", "debug"])
    out = capsys.readouterr().out
    assert "connecting to database..." in out
    assert "bye!" in out
    assert amazon_store.logger.level == logging.DEBUG
    assert "connected to database" in log_file.read_text()


def test_main_connection_failure(tmp_path, capsys, reset_logger):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing" / "store.db"), "--log-file", str(tmp_path / "store.log")])
    assert excinfo.value.code == -1
    assert "unable to connect to database" in capsys.readouterr().err


def test_oversized_menu_input_keeps_loop_alive(db, make_user, scripted_input, capsys):
    make_user("bob", 10, 10)
    app = Application(db)
    scripted_input(
        "2", "bob", "pw",
        "2", "99999999999999999999",   # view product list
        "20", "9",
    )
    app.run()
    assert "your input is invalid" in capsys.readouterr().out
    assert not app.running


def test_configure_logging_closes_previous_handler(tmp_path, reset_logger):
    amazon_store.configure_logging("INFO", str(tmp_path / "first.log"))
    first = amazon_store.logger.handlers[0]
    amazon_store.logger.info("hello")
    amazon_store.configure_logging("INFO", str(tmp_path / "second.log"))
    assert first.stream is None
    assert amazon_store.logger.handlers != [first]
    assert len(amazon_store.logger.handlers) == 1
