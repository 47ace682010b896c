import unittest
from unittest.mock import MagicMock, patch

from foodsites.forms import ContactSubmission, FormFields
from foodsites.mailer import EmailMessage, MailerError, ResendMailer


def _message() -> EmailMessage:
    return EmailMessage(
        from_email="onboarding@resend.dev",
        to="team@example.org",
        subject="Hello",
        text="text",
        html="<p>html</p>",
    )


class ResendMailerTests(unittest.TestCase):
    @patch("foodsites.mailer.requests.post")
    def test_send_posts_payload(self, mock_post):
        mock_post.return_value = MagicMock(ok=True, status_code=200)
        mailer = ResendMailer(api_key="re_123", to_email="team@example.org")
        mailer.send(_message())

        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "https://api.resend.com/emails")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer re_123")
        self.assertEqual(kwargs["json"]["from"], "onboarding@resend.dev")
        self.assertEqual(kwargs["json"]["to"], "team@example.org")

    @patch("foodsites.mailer.requests.post")
    def test_send_failure_raises(self, mock_post):
        mock_post.return_value = MagicMock(ok=False, status_code=403, text="forbidden")
        mailer = ResendMailer(api_key="re_123", to_email="team@example.org")
        with self.assertRaises(MailerError) as ctx:
            mailer.send(_message())
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(ctx.exception.body, "forbidden")


class ContactSubmissionTests(unittest.TestCase):
    def test_email_body_lists_fields(self):
        submission = ContactSubmission.from_fields(
            FormFields(
                {
                    "org": " Helping Hands ",
                    "contact_type": "business",
                    "name": "Sam",
                    "email": "sam@example.com",
                    "message": "Line one\nLine two",
                }
            )
        )
        message = submission.to_email("from@example.org", "to@example.org")
        self.assertEqual(
            message.text,
            "Contact type: business\n"
            "Organization: Helping Hands\n"
            "Name: Sam\n"
            "Email: sam@example.com\n"
            "Phone: (not provided)\n"
            "\n"
            "Message:\nLine one\nLine two",
        )
        self.assertIn("<strong>Phone:</strong> (not provided)", message.html)

    def test_spam_and_completeness(self):
        self.assertTrue(ContactSubmission.from_fields(FormFields({"website": "x"})).is_spam)
        self.assertFalse(
            ContactSubmission.from_fields(FormFields({"name": "Sam", "email": "a@b"})).is_complete
        )


if __name__ == "__main__":
    unittest.main()
