"""
Tests for configuration loading and the exception types.
"""
import os
import tempfile
import unittest
from unittest.mock import patch

from salesy.config import Config
from salesy.exceptions import BatchInsertError, ConfigError, SalesyError, ValidationError


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.config = Config()

    def test_import_defaults(self):
        import_config = self.config.import_config
        self.assertEqual(import_config['allowed_extension'], '.csv')
        self.assertIsInstance(import_config['batch_size'], int)
        self.assertIsInstance(self.config.inventory_config['medium_risk_multiplier'], float)

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            self.config.load('/nonexistent/settings.ini')

    def test_typed_getters(self):
        self.assertEqual(self.config.get('NOPE', 'missing', 'fallback'), 'fallback')
        self.assertEqual(self.config.get_int('NOPE', 'missing', 7), 7)
        self.assertIs(self.config.get_boolean('NOPE', 'missing', True), True)

    def test_sqlite_url(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, 'settings.ini')
            with open(path, 'w') as f:
                f.write("[DATABASE]\ntype = sqlite\nsqlite_path = test.db\n")

            original_type = self.config.get('DATABASE', 'type')
            original_path = self.config.get('DATABASE', 'sqlite_path')
            original_file = self.config._config_path
            try:
                self.config.load(path)
                self.assertEqual(self.config.get_db_url(), 'sqlite:///test.db')
            finally:
                self.config.set('DATABASE', 'type', original_type)
                self.config.set('DATABASE', 'sqlite_path', original_path)
                self.config._config_path = original_file

    def test_supabase_env_overrides_file(self):
        env = {'SUPABASE_URL': 'https://example.supabase.co', 'SUPABASE_KEY': 'anon-key'}
        with patch.dict(os.environ, env):
            self.assertEqual(self.config.supabase_config, {'url': env['SUPABASE_URL'], 'key': 'anon-key'})


class TestExceptions(unittest.TestCase):

    def test_to_dict(self):
        error = ValidationError("Bad file", code='EMPTY_FILE', details={'file_name': 'a.csv'})
        self.assertEqual(error.to_dict(), {
            'error': 'ValidationError',
            'message': 'Bad file',
            'code': 'EMPTY_FILE',
            'details': {'file_name': 'a.csv'},
        })
        self.assertEqual(str(error), '[EMPTY_FILE] Bad file')

    def test_batch_insert_error(self):
        error = BatchInsertError(start_row=201, inserted_count=200)
        self.assertIsInstance(error, SalesyError)
        self.assertEqual(error.details, {'start_row': 201, 'inserted_count': 200})
        self.assertEqual(str(error), "Sales history insert failed")


if __name__ == '__main__':
    unittest.main()
