"""Tests for PostgresDispatcher operations."""

from unittest.mock import Mock

import pytest

from postgressor.infra.postgres import PostgresDispatcher
from postgressor.infra.shell import CommandResult, CommandRunner

OK = CommandResult(success=True, returncode=0)
FAILED = CommandResult(success=False, returncode=1)


@pytest.fixture
def runner():
    runner = Mock(spec=CommandRunner)
    runner.run.return_value = OK
    return runner


@pytest.fixture
def console():
    return Mock()


@pytest.fixture
def dispatcher(connection_config, runner, console):
    return PostgresDispatcher(connection_config, runner, console)


def _argvs(runner):
    return [call.args[0].argv for call in runner.run.call_args_list]


def test_create_database_success(dispatcher, runner, console):
    result = dispatcher.create_database()

    assert result.success is True
    command = runner.run.call_args.args[0]
    assert command.executable == "createdb"
    assert "app_test" in command.argv
    assert command.argv[-6:] == ["-h", "localhost", "-U", "app", "-p", "5432"]
    console.ok.assert_called_once()
    assert "app_test" in console.ok.call_args.args[0]


def test_create_database_failure_prints_nothing(dispatcher, runner, console):
    runner.run.return_value = FAILED

    result = dispatcher.create_database()

    assert result.returncode == 1
    console.ok.assert_not_called()


@pytest.mark.parametrize(
    ("operation", "executable", "message"),
    [
        ("create_user", "psql", "Created user app"),
        ("drop_user", "dropuser", "Dropped user app"),
        ("drop_database", "dropdb", "Dropped database app_test"),
        ("dump_database", "pg_dump", "Dumped database app_test to app_test.dump file"),
    ],
)
def test_operation_messages(dispatcher, runner, console, operation, executable, message):
    getattr(dispatcher, operation)()

    assert runner.run.call_args.args[0].executable == executable
    console.ok.assert_called_once_with(message)


def test_create_user_superuser_flag(dispatcher, runner):
    dispatcher.create_user(superuser=True)

    assert "SUPERUSER" in runner.run.call_args.args[0].argv[-1]


def test_restore_without_toggle_runs_once(dispatcher, runner, console):
    dispatcher.restore_database("app_test.dump")

    assert runner.run.call_count == 1
    assert _argvs(runner)[0][:2] == ["pg_restore", "app_test.dump"]
    console.ok.assert_called_once_with(
        "Restored database app_test from app_test.dump file"
    )


def test_restore_with_toggle_grants_restores_revokes(dispatcher, runner, console):
    result = dispatcher.restore_database("app_test.dump", superuser=True)

    assert result.success is True
    argvs = _argvs(runner)
    assert len(argvs) == 3
    assert argvs[0][-1] == "ALTER USER app WITH SUPERUSER;"
    assert argvs[1][0] == "pg_restore"
    assert argvs[2][-1] == "ALTER USER app WITH NOSUPERUSER;"
    console.ok.assert_called_once()


def test_restore_failure_still_revokes(dispatcher, runner, console):
    runner.run.side_effect = [OK, FAILED, OK]

    result = dispatcher.restore_database("app_test.dump", superuser=True)

    assert result is FAILED
    assert _argvs(runner)[2][-1] == "ALTER USER app WITH NOSUPERUSER;"
    console.ok.assert_not_called()


def test_restore_interrupted_still_revokes(dispatcher, runner):
    runner.run.side_effect = [OK, KeyboardInterrupt, OK]

    with pytest.raises(KeyboardInterrupt):
        dispatcher.restore_database("app_test.dump", superuser=True)

    assert runner.run.call_count == 3
    assert _argvs(runner)[2][-1] == "ALTER USER app WITH NOSUPERUSER;"


def test_failed_grant_skips_restore(dispatcher, runner, console):
    runner.run.return_value = FAILED

    result = dispatcher.restore_database("app_test.dump", superuser=True)

    assert result is FAILED
    assert runner.run.call_count == 1
    console.error.assert_called_once()


def test_failed_revoke_warns(dispatcher, runner, console):
    runner.run.side_effect = [OK, OK, FAILED]

    result = dispatcher.restore_database("app_test.dump", superuser=True)

    assert result.success is True
    console.warn.assert_called_once()
