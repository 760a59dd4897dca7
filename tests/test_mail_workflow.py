import pytest

from event_connect.auth.identity import ReauthenticationRequired
from event_connect.directory.errors import DirectoryError, DirectoryErrorKind
from event_connect.core.config import DEFAULT_MAIL_SUBJECT
from event_connect.services.mail_workflow import MailWorkflow

from tests.fakes import FakeDirectory


class TestMailWorkflow:
    def test_sends_html_mail_with_photo_attachment(self):
        directory = FakeDirectory(my_photo=b"\x89PNG")

        message = MailWorkflow(directory).send_mail("adele@contoso.com; alex@contoso.com ")

        assert directory.sent == [message]
        assert message.subject == DEFAULT_MAIL_SUBJECT
        assert message.to_recipients == ["adele@contoso.com", "alex@contoso.com"]
        assert "Congratulations" in message.html_body
        assert len(message.attachments) == 1
        attachment = message.attachments[0]
        assert (attachment.name, attachment.content_type, attachment.content_bytes) == ("me.png", "image/png", b"\x89PNG")

    def test_missing_photo_sends_without_attachment(self):
        directory = FakeDirectory(my_photo=None)

        message = MailWorkflow(directory).send_mail("adele@contoso.com")

        assert message.attachments == []
        assert len(directory.sent) == 1

    def test_invalid_user_photo_is_treated_as_missing(self):
        directory = FakeDirectory()
        directory.errors["get_my_photo"] = DirectoryError(DirectoryErrorKind.INVALID_USER, code="ErrorInvalidUser")

        message = MailWorkflow(directory).send_mail("adele@contoso.com")

        assert message.attachments == []

    def test_other_photo_failure_propagates(self):
        directory = FakeDirectory()
        directory.errors["get_my_photo"] = DirectoryError(DirectoryErrorKind.UNKNOWN, code="ServiceUnavailable")

        with pytest.raises(DirectoryError):
            MailWorkflow(directory).send_mail("adele@contoso.com")
        assert directory.sent == []

    def test_expired_token_requires_reauthentication(self):
        directory = FakeDirectory()
        directory.errors["get_my_photo"] = DirectoryError(DirectoryErrorKind.TOKEN_EXPIRED, code="TokenNotFound")

        with pytest.raises(ReauthenticationRequired):
            MailWorkflow(directory).send_mail("adele@contoso.com")
        assert directory.sent == []

    def test_no_valid_recipients_still_submits(self):
        directory = FakeDirectory()

        message = MailWorkflow(directory).send_mail(" ; ;")

        assert message.to_recipients == []
        assert directory.sent == [message]

    def test_none_recipients_is_a_no_op(self):
        directory = FakeDirectory()

        assert MailWorkflow(directory).send_mail(None) is None
        assert directory.calls == []

    def test_custom_subject(self):
        directory = FakeDirectory()
        message = MailWorkflow(directory, subject="Team update").send_mail("adele@contoso.com")
        assert message.subject == "Team update"
