import unittest
from pathlib import Path

from domain.errors import ConfigurationError
from infrastructure.cli.settings import load_settings_from_env


class LoadSettingsTests(unittest.TestCase):
    def test_defaults_with_only_anthropic_key(self) -> None:
        settings = load_settings_from_env({"ANTHROPIC_API_KEY": "sk-ant-1"}, repository_directory=Path("/repo"))

        self.assertEqual(settings.ai_provider, "anthropic")
        self.assertEqual(settings.ai_api_key, "sk-ant-1")
        self.assertEqual(settings.ai_model, "claude-3-haiku-20240307")
        self.assertEqual(settings.publisher, "gh")
        self.assertEqual(settings.base_branch, "master")
        self.assertEqual(settings.base_ref, "origin/master")
        self.assertEqual(settings.remote, "origin")
        self.assertEqual(settings.title, "Automated Pull Request")
        self.assertFalse(settings.dry_run)
        self.assertIsNone(settings.progress)
        self.assertEqual(settings.repository_directory, Path("/repo"))
        self.assertNotIn("sk-ant-1", repr(settings))

    def test_accepts_legacy_anthropic_key_name(self) -> None:
        settings = load_settings_from_env({"ANTHROPIC_KEY": "legacy"})

        self.assertEqual(settings.ai_api_key, "legacy")

    def test_missing_ai_key_is_configuration_error(self) -> None:
        with self.assertRaises(ConfigurationError) as raised_error:
            load_settings_from_env({})

        self.assertIn("ANTHROPIC_API_KEY", str(raised_error.exception))

    def test_openai_provider_requires_openai_key(self) -> None:
        with self.assertRaises(ConfigurationError) as raised_error:
            load_settings_from_env({"AI_PROVIDER": "openai", "ANTHROPIC_API_KEY": "x"})

        self.assertIn("OPENAI_API_KEY", str(raised_error.exception))

    def test_api_publisher_requires_github_token(self) -> None:
        with self.assertRaises(ConfigurationError) as raised_error:
            load_settings_from_env({"ANTHROPIC_API_KEY": "x", "PR_PUBLISHER": "api"})

        self.assertIn("GITHUB_TOKEN", str(raised_error.exception))

    def test_base_ref_follows_remote_and_branch(self) -> None:
        settings = load_settings_from_env(
            {"ANTHROPIC_API_KEY": "x", "PR_REMOTE": "upstream", "PR_BASE_BRANCH": "main"}
        )

        self.assertEqual(settings.base_ref, "upstream/main")

    def test_parses_flags_and_numbers(self) -> None:
        settings = load_settings_from_env(
            {
                "ANTHROPIC_API_KEY": "x",
                "PR_DRY_RUN": "yes",
                "PR_PROGRESS": "false",
                "ANTHROPIC_MAX_TOKENS": "2048",
                "LOG_LEVEL": "debug",
            }
        )

        self.assertTrue(settings.dry_run)
        self.assertFalse(settings.progress)
        self.assertEqual(settings.ai_max_tokens, 2048)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_rejects_invalid_values(self) -> None:
        invalid_environments = [
            {"ANTHROPIC_API_KEY": "x", "AI_PROVIDER": "cohere"},
            {"ANTHROPIC_API_KEY": "x", "PR_PUBLISHER": "ftp"},
            {"ANTHROPIC_API_KEY": "x", "PR_DRY_RUN": "maybe"},
            {"ANTHROPIC_API_KEY": "x", "ANTHROPIC_MAX_TOKENS": "lots"},
            {"ANTHROPIC_API_KEY": "x", "ANTHROPIC_MAX_TOKENS": "0"},
            {"ANTHROPIC_API_KEY": "x", "LOG_LEVEL": "chatty"},
        ]
        for environ in invalid_environments:
            with self.subTest(environ=environ):
                with self.assertRaises(ConfigurationError):
                    load_settings_from_env(environ)


if __name__ == "__main__":
    unittest.main()
