import io
import logging
import unittest

from infrastructure.observability.context import reset_run_id, set_run_id
from infrastructure.observability.logging_utils import (
    SecretRedactor,
    build_log_handler,
    log_event,
    redact_secrets,
    register_sensitive_values,
    structured_message,
)


class LoggingUtilsTests(unittest.TestCase):
    def test_redacts_registered_values_and_token_patterns(self) -> None:
        register_sensitive_values("super-secret-value", None, "")

        redacted = redact_secrets(
            "key=super-secret-value auth=Bearer abc.def token=ghp_abcdefghijklmnop"
        )

        self.assertNotIn("super-secret-value", redacted)
        self.assertNotIn("abc.def", redacted)
        self.assertNotIn("ghp_abcdefghijklmnop", redacted)
        self.assertIn("Bearer [REDACTED]", redacted)

    def test_structured_message_skips_none_and_quotes_values(self) -> None:
        message = structured_message(
            "workflow.step",
            step="publish",
            status="error",
            detail=None,
            ok=False,
            count=3,
            note='said "hi"',
        )

        self.assertEqual(
            message,
            'event=workflow.step step="publish" status="error" ok="false" count="3" note="said \\"hi\\""',
        )

    def test_structured_message_redacts_field_values(self) -> None:
        message = structured_message("github.pr.create", header="Bearer tok123")

        self.assertIn("Bearer [REDACTED]", message)
        self.assertNotIn("tok123", message)

    def test_structured_message_keeps_multiline_output_on_one_line(self) -> None:
        message = structured_message("repo.command.failed", stderr="fatal: bad ref\r\nhint: fetch first\n")

        self.assertEqual(message, 'event=repo.command.failed stderr="fatal: bad ref\\r\\nhint: fetch first\\n"')
        self.assertNotIn("\n", message)


class SecretRedactorTests(unittest.TestCase):
    def test_longer_secret_is_masked_whole(self) -> None:
        redactor = SecretRedactor()
        redactor.register("abcdef", "abcdef-123456")

        self.assertEqual(redactor.redact("token=abcdef-123456"), "token=[REDACTED]")

    def test_short_values_are_not_registered(self) -> None:
        redactor = SecretRedactor(patterns=())
        redactor.register("abc", "fix")

        self.assertEqual(redactor.redact("fix abc bug"), "fix abc bug")


class LogHandlerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.stream = io.StringIO()
        self.logger = logging.getLogger("tests.logging_utils.handler")
        self.logger.propagate = False
        self.logger.setLevel(logging.INFO)
        self.handler = build_log_handler(self.stream)
        self.logger.addHandler(self.handler)
        self.addCleanup(self.logger.removeHandler, self.handler)

    def test_plain_log_calls_are_redacted_and_tagged_with_run_id(self) -> None:
        register_sensitive_values("registered-api-key-42")
        token = set_run_id("run123")
        try:
            self.logger.warning('event=workflow.observer.failed error="%s"', "rejected registered-api-key-42")
        finally:
            reset_run_id(token)

        line = self.stream.getvalue()
        self.assertIn("[run_id=run123]", line)
        self.assertIn("rejected [REDACTED]", line)
        self.assertNotIn("registered-api-key-42", line)

    def test_tracebacks_are_redacted(self) -> None:
        try:
            raise RuntimeError("auth failed for Bearer secret.token.value")
        except RuntimeError:
            self.logger.exception("event=cli.workflow.failed")

        output = self.stream.getvalue()
        self.assertIn("Traceback", output)
        self.assertNotIn("secret.token.value", output)

    def test_log_event_skips_disabled_levels(self) -> None:
        log_event(self.logger, logging.DEBUG, "repo.command.run", command="git status")
        log_event(self.logger, logging.INFO, "repo.command.run", command="git diff")

        output = self.stream.getvalue()
        self.assertNotIn("git status", output)
        self.assertIn('event=repo.command.run command="git diff"', output)


if __name__ == "__main__":
    unittest.main()
