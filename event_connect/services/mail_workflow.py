from typing import List, Optional

from event_connect.auth.identity import ReauthenticationRequired
from event_connect.core.config import DEFAULT_MAIL_SUBJECT
from event_connect.directory.client import DirectoryClient
from event_connect.directory.errors import DirectoryError, DirectoryErrorKind, MISSING_PHOTO_KINDS
from event_connect.directory.types import FileAttachment, MailMessage
from event_connect.observability.logger import log_event, timing
from event_connect.rendering.renderer import render_email_body
from event_connect.services.recipients import parse_recipients


class MailWorkflow:
    """Sends the sample HTML mail from the signed-in user, with their photo attached when they have one."""

    def __init__(self, directory: DirectoryClient, subject: str = DEFAULT_MAIL_SUBJECT):
        self.directory = directory
        self.subject = subject

    def _photo_attachments(self) -> List[FileAttachment]:
        try:
            photo = self.directory.get_my_photo()
        except DirectoryError as exc:
            if exc.kind in MISSING_PHOTO_KINDS:
                return []
            if exc.kind is DirectoryErrorKind.TOKEN_EXPIRED:
                raise ReauthenticationRequired(exc.message or exc.code) from exc
            raise

        if not photo:
            return []
        return [FileAttachment(name="me.png", content_type="image/png", content_bytes=photo)]

    def send_mail(self, recipients: Optional[str]) -> Optional[MailMessage]:
        """
        Compose and submit the mail.

        An input that parses to no addresses is still submitted with an
        empty recipient list; the directory decides whether to accept it.
        """
        if recipients is None:
            return None

        with timing() as t:
            message = MailMessage(
                subject=self.subject,
                html_body=render_email_body(),
                to_recipients=parse_recipients(recipients),
                attachments=self._photo_attachments(),
            )
            self.directory.send_mail(message)

        log_event(
            action="sent",
            workflow="send_mail",
            subject=message.subject,
            recipients_count=len(message.to_recipients),
            duration_ms=t.elapsed_ms,
            attachments_count=len(message.attachments),
        )
        return message
