"""Tests for the add and delete operations."""

import dataclasses
from pathlib import Path
from unittest.mock import Mock

import pytest
from conftest import errors_of, output_of

from user_manager.accounts.exceptions import (
    AccountCreateError,
    AccountDeleteError,
    AccountError,
    AccountNotFoundError,
    ExpirationError,
    InputError,
    PasswordSetError,
    SystemAccountProtectedError,
)
from user_manager.accounts.store import AccountStore
from user_manager.actions import add_user, delete_user
from user_manager.domain.models import Account

PASSWORD = "Tr0ub4dor&3"


def _add_answers(username="alice", full_name="Alice Liddell", home="", expiration=""):
    return [username, full_name, PASSWORD, home, expiration]


# ==============================================================================
# Add
# ==============================================================================


class TestAddUser:
    """Tests for add_user."""

    def test_creates_account_with_default_home(self, make_context, fake_accounts, settings, action_log):
        context = make_context(_add_answers())

        add_user(context)

        home = settings.home_root / "alice"
        assert fake_accounts.calls == [
            ("create", "alice", "Alice Liddell", home),
            ("set_password", "alice"),
            ("expire_password", "alice"),
        ]
        assert fake_accounts.passwords["alice"] == PASSWORD

    def test_prints_summary(self, make_context, settings, action_log):
        context = make_context(_add_answers())

        add_user(context)

        out = output_of(context)
        assert "User 'alice' added successfully!" in out
        assert f"Home Directory: {settings.home_root / 'alice'}" in out
        assert "Hostname: testhost" in out

    def test_custom_home(self, make_context, fake_accounts, action_log):
        context = make_context(_add_answers(home="/srv/users/alice"))

        add_user(context)

        assert fake_accounts.calls[0][3] == Path("/srv/users/alice")
        assert "Home Directory: /srv/users/alice" in output_of(context)

    def test_expiration_date(self, make_context, fake_accounts, action_log):
        context = make_context(_add_answers(expiration="2030-12-31"))

        add_user(context)

        assert ("set_expiration", "alice", "2030-12-31") in fake_accounts.calls
        assert "Expiration date set to: 2030-12-31" in output_of(context)

    def test_expiration_failure_is_only_a_warning(self, make_context, fake_accounts, action_log):
        fake_accounts.fail("set_expiration", ExpirationError("alice", "someday", "chage: bad date"))
        context = make_context(_add_answers(expiration="someday"))

        add_user(context)

        assert "Warning: Failed to set expiration date for 'alice'." in errors_of(context)
        assert "Expiration date set to" not in output_of(context)
        assert fake_accounts.called("expire_password")
        assert len(action_log()) == 1

    def test_expire_password_failure_is_only_a_warning(self, make_context, fake_accounts, action_log):
        fake_accounts.fail("expire_password", AccountError("passwd failed"))
        context = make_context(_add_answers())

        add_user(context)

        assert "Warning: passwd failed" in errors_of(context)
        assert len(action_log()) == 1

    def test_logs_username_and_home_never_password(self, make_context, settings, action_log):
        add_user(make_context(_add_answers()))

        lines = action_log()
        assert len(lines) == 1
        assert lines[0].endswith(
            f" - Added new user alice with home directory {settings.home_root / 'alice'}."
        )
        assert PASSWORD not in lines[0]

    def test_create_failure_is_fatal(self, make_context, fake_accounts, action_log):
        fake_accounts.fail("create", AccountCreateError("alice", "useradd: exists"))
        context = make_context(_add_answers())

        with pytest.raises(AccountCreateError):
            add_user(context)

        assert not fake_accounts.called("set_password")
        assert action_log() == []

    def test_password_failure_is_fatal_without_rollback(self, make_context, fake_accounts, action_log):
        fake_accounts.fail("set_password", PasswordSetError("alice"))
        context = make_context(_add_answers())

        with pytest.raises(PasswordSetError):
            add_user(context)

        assert fake_accounts.lookup("alice") is not None
        assert not fake_accounts.called("delete")
        assert action_log() == []

    def test_empty_username(self, make_context, fake_accounts, action_log):
        context = make_context(_add_answers(username=""))

        with pytest.raises(InputError):
            add_user(context)

        assert fake_accounts.calls == []
        assert action_log() == []

    def test_empty_password(self, make_context, fake_accounts):
        context = make_context(["alice", "Alice", "", "", ""])

        with pytest.raises(InputError, match="password"):
            add_user(context)

        assert fake_accounts.calls == []

    def test_prompt_order(self, make_context, settings, action_log):
        context = make_context(_add_answers())

        add_user(context)

        prompts = context.prompter.prompts
        assert prompts[0] == "Enter the username to add: "
        assert prompts[1] == "Enter the full name of the user: "
        assert prompts[2] == "Enter the password: "
        assert str(settings.home_root / "alice") in prompts[3]
        assert prompts[4].startswith("Enter an expiration date (YYYY-MM-DD")


# ==============================================================================
# Delete
# ==============================================================================


class TestDeleteUser:
    """Tests for delete_user."""

    def test_unknown_user(self, make_context, fake_accounts, action_log):
        context = make_context(["ghost", "1"])

        with pytest.raises(AccountNotFoundError, match="User 'ghost' does not exist."):
            delete_user(context)

        assert fake_accounts.calls == []
        assert context.prompter.remaining == ["1"]
        assert action_log() == []

    @pytest.mark.parametrize("uid", [0, 1, 100, 999])
    @pytest.mark.parametrize("confirmation", ["1", "", "n"])
    def test_system_accounts_are_protected(
        self, make_context, fake_accounts, action_log, uid, confirmation
    ):
        fake_accounts.accounts["svc"] = Account("svc", uid, Path("/var/lib/svc"))
        context = make_context(["svc", confirmation])

        with pytest.raises(SystemAccountProtectedError):
            delete_user(context)

        assert not fake_accounts.called("delete")
        assert fake_accounts.lookup("svc") is not None
        assert action_log() == []

    def test_threshold_from_settings(self, make_context, fake_accounts, settings):
        strict = dataclasses.replace(settings, min_human_uid=2000)
        context = make_context(["bob", "1"], settings=strict)

        with pytest.raises(SystemAccountProtectedError):
            delete_user(context)

    def test_confirm_removes_home(self, make_context, fake_accounts, action_log):
        context = make_context(["bob", "1"])

        account = delete_user(context)

        assert account.uid == 1001
        assert fake_accounts.calls == [("delete", "bob", True)]
        assert "User 'bob' has been deleted successfully." in output_of(context)

    @pytest.mark.parametrize("confirmation", ["", "0", "yes", "11"])
    def test_other_answers_keep_home(self, make_context, fake_accounts, action_log, confirmation):
        context = make_context(["bob", confirmation])

        delete_user(context)

        assert fake_accounts.calls == [("delete", "bob", False)]

    def test_logs_deleted_username(self, make_context, action_log):
        delete_user(make_context(["bob", ""]))

        lines = action_log()
        assert len(lines) == 1
        assert lines[0].endswith(" - Deleted user account for bob.")

    def test_delete_failure_is_fatal(self, make_context, fake_accounts, action_log):
        fake_accounts.fail("delete", AccountDeleteError("bob", "userdel: user bob is logged in"))
        context = make_context(["bob", "1"])

        with pytest.raises(AccountDeleteError):
            delete_user(context)

        assert action_log() == []


# ==============================================================================
# Real AccountStore
# ==============================================================================


class TestAddUserWithAccountStore:
    """add_user driving the real AccountStore with subprocess.run mocked."""

    def test_blank_full_name_is_passed_to_useradd(
        self, make_context, settings, action_log, mock_subprocess_run
    ):
        mock_subprocess_run.return_value = Mock(returncode=0, stdout="", stderr="")
        context = make_context(_add_answers(full_name=""), accounts=AccountStore())

        add_user(context)

        useradd = mock_subprocess_run.call_args_list[0].args[0]
        home = settings.home_root / "alice"
        assert useradd == ["useradd", "-c", "", "-m", "-d", str(home), "alice"]
        assert "User 'alice' added successfully!" in output_of(context)
        assert action_log()[-1].endswith(
            f"Added new user alice with home directory {home}."
        )
