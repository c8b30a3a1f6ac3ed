from kumaclient.errors import CommandError, KumaError, NotFoundError


def test_not_found_plain_message():
    assert str(NotFoundError()) == "not found"


def test_not_found_with_context():
    error = NotFoundError("get docker host")
    assert str(error) == "get docker host: not found"
    assert error.context == "get docker host"


def test_not_found_is_kuma_and_lookup_error():
    error = NotFoundError("get docker host")
    assert isinstance(error, KumaError)
    assert isinstance(error, LookupError)
    assert str(error) == "get docker host: not found"
    assert error.context == "get docker host"

    plain = NotFoundError()
    assert isinstance(plain, LookupError)
    assert str(plain) == "not found"


def test_command_error_message_and_fields():
    error = CommandError("login", "Incorrect username or password.")
    assert str(error) == "login: Incorrect username or password."
    assert error.command == "login"
    assert error.message == "Incorrect username or password."


def test_command_error_caught_as_kuma_error():
    error = CommandError("setup", "authIncorrectCreds")
    assert isinstance(error, KumaError)
    assert str(error) == "setup: authIncorrectCreds"
    assert error.command == "setup"
    assert error.message == "authIncorrectCreds"