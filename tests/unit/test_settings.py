import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from helpdesk_client.config import settings as settings_module
from helpdesk_client.config.settings import (
    DEFAULT_MOCK_URL,
    get_settings,
    is_api_mocked,
    load_settings,
    reset_settings,
)
from helpdesk_client.exceptions import ConfigurationError


class TestLoadSettings(unittest.TestCase):
    """Test layered settings loading."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        reset_settings()
        self.addCleanup(reset_settings)

        # Keep the working directory's config/helpdesk.yaml out of the picture
        patcher = mock.patch.object(settings_module, 'DEFAULT_CONFIG_PATH', Path(self.tmp.name) / 'missing.yaml')
        patcher.start()
        self.addCleanup(patcher.stop)

    def write_config(self, text):
        path = Path(self.tmp.name) / 'helpdesk.yaml'
        path.write_text(text)
        return path

    def test_environment_variables(self):
        env = {'HELPDESK_URL': 'https://acme.example.com/', 'HELPDESK_TIMEOUT': '5'}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = load_settings()

        self.assertEqual(settings.url, 'https://acme.example.com')
        self.assertEqual(settings.timeout, 5.0)
        self.assertFalse(settings.mock)
        self.assertIsNone(settings.auth)

    def test_yaml_file_is_overlaid_by_environment(self):
        path = self.write_config("url: https://file.example.com\nusername: agent@example.com\ntoken: abc\n")
        with mock.patch.dict(os.environ, {'HELPDESK_TOKEN': 'from-env'}, clear=True):
            settings = load_settings(path)

        self.assertEqual(settings.url, 'https://file.example.com')
        self.assertEqual(settings.auth, ('agent@example.com/token', 'from-env'))

    def test_overrides_win(self):
        with mock.patch.dict(os.environ, {'HELPDESK_URL': 'https://env.example.com'}, clear=True):
            settings = load_settings(url='https://override.example.com')
        self.assertEqual(settings.url, 'https://override.example.com')

    def test_stub_api_truthy_values(self):
        for value, expected in (('true', True), ('1', True), ('YES', True), ('on', True), ('false', False), ('0', False)):
            with self.subTest(value=value):
                with mock.patch.dict(os.environ, {'STUB_API': value, 'HELPDESK_URL': 'https://a.example.com'}, clear=True):
                    self.assertEqual(load_settings().mock, expected)

    def test_mock_mode_defaults_the_url(self):
        with mock.patch.dict(os.environ, {'STUB_API': 'true'}, clear=True):
            settings = load_settings()
        self.assertEqual(settings.url, DEFAULT_MOCK_URL)
        self.assertTrue(settings.mock)

    def test_missing_url(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigurationError) as ctx:
                load_settings()
        self.assertEqual(ctx.exception.setting_name, 'HELPDESK_URL')
        self.assertIn('HELPDESK_URL', ctx.exception.guidance)

    def test_invalid_url(self):
        with mock.patch.dict(os.environ, {'HELPDESK_URL': 'acme.example.com'}, clear=True):
            with self.assertRaises(ConfigurationError) as ctx:
                load_settings()
        self.assertEqual(ctx.exception.setting_name, 'HELPDESK_URL')

    def test_invalid_timeout(self):
        with mock.patch.dict(os.environ, {'HELPDESK_URL': 'https://a.example.com', 'HELPDESK_TIMEOUT': '-1'}, clear=True):
            with self.assertRaises(ConfigurationError) as ctx:
                load_settings()
        self.assertEqual(ctx.exception.setting_name, 'HELPDESK_TIMEOUT')

    def test_explicit_missing_file(self):
        with self.assertRaises(ConfigurationError):
            load_settings(Path(self.tmp.name) / 'nope.yaml')

    def test_file_must_hold_a_mapping(self):
        path = self.write_config("- just\n- a list\n")
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigurationError):
                load_settings(path)

    def test_malformed_yaml(self):
        path = self.write_config("url: [unclosed\n")
        with self.assertRaises(ConfigurationError):
            load_settings(path)

    def test_get_settings_is_cached(self):
        with mock.patch.dict(os.environ, {'STUB_API': 'yes'}, clear=True):
            first = get_settings()
            self.assertTrue(is_api_mocked())
        self.assertIs(get_settings(), first)

        reset_settings()
        with mock.patch.dict(os.environ, {'HELPDESK_URL': 'https://b.example.com'}, clear=True):
            self.assertFalse(get_settings().mock)
