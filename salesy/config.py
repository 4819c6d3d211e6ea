import os
import configparser
from pathlib import Path

DEFAULT_CONFIG_PATH = Path('config') / 'settings.ini'


class Config:
    """Configuration manager for Salesy."""

    _instance = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the configuration if not already initialized."""
        if self._initialized:
            return

        self._config_path = Path(os.getenv('SALESY_CONFIG', str(DEFAULT_CONFIG_PATH)))
        self._config = configparser.ConfigParser(interpolation=None)
        self._create_default_config()

        if self._config_path.exists():
            self._config.read(self._config_path)

        self._initialized = True

    def _create_default_config(self):
        """Populate default configuration values."""
        self._config['DATABASE'] = {
            'type': 'supabase',
            'engine': 'postgresql',
            'host': 'localhost',
            'port': '5432',
            'database': 'salesy',
            'username': 'postgres',
            'password': 'postgres',
            'echo': 'False',
            'sqlite_path': 'salesy.db',
            'local_user_id': ''
        }

        self._config['SUPABASE'] = {
            'url': '',
            'key': ''
        }

        self._config['LOGGING'] = {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'directory': 'logs',
            'max_size_mb': '10',
            'backup_count': '5',
            'console_output': 'True'
        }

        self._config['IMPORT'] = {
            'batch_size': '100',
            'allowed_extension': '.csv',
            'sales_history_limit': '500'
        }

        self._config['INVENTORY'] = {
            'medium_risk_multiplier': '1.5',
            'items_per_page': '10',
            'top_products': '5'
        }

    def load(self, path):
        """Read settings from another ini file on top of the current values.

        Args:
            path: Path to the ini file
        """
        path = Path(path)
        if not path.exists():
            from salesy.exceptions import ConfigError
            raise ConfigError(f"Config file not found: {path}")

        self._config_path = path
        self._config.read(path)

    def save(self):
        """Save configuration to file."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, 'w') as configfile:
            self._config.write(configfile)

    def get(self, section, key, default=None):
        """Get configuration value."""
        try:
            return self._config.get(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return default

    def get_int(self, section, key, default=None):
        """Get configuration value as integer."""
        try:
            return self._config.getint(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get_float(self, section, key, default=None):
        """Get configuration value as float."""
        try:
            return self._config.getfloat(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def get_boolean(self, section, key, default=None):
        """Get configuration value as boolean."""
        try:
            return self._config.getboolean(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return default

    def set(self, section, key, value):
        """Set configuration value in memory. Call save() to persist it."""
        if not self._config.has_section(section):
            self._config.add_section(section)

        self._config.set(section, key, str(value))

    def get_db_url(self):
        """Generate SQLAlchemy database URL."""
        db_type = self.get('DATABASE', 'type', 'supabase').lower()
        if db_type == 'sqlite':
            return f"sqlite:///{self.get('DATABASE', 'sqlite_path', 'salesy.db')}"

        engine = self.get('DATABASE', 'engine', 'postgresql')
        username = self.get('DATABASE', 'username', 'postgres')
        password = self.get('DATABASE', 'password', 'postgres')
        host = self.get('DATABASE', 'host', 'localhost')
        port = self.get('DATABASE', 'port', '5432')
        database = self.get('DATABASE', 'database', 'salesy')

        return f"{engine}://{username}:{password}@{host}:{port}/{database}"

    @property
    def supabase_config(self):
        """Get Supabase credentials, preferring environment variables."""
        if os.getenv('SUPABASE_URL') and os.getenv('SUPABASE_KEY'):
            return {
                'url': os.getenv('SUPABASE_URL'),
                'key': os.getenv('SUPABASE_KEY')
            }

        return {
            'url': self.get('SUPABASE', 'url', ''),
            'key': self.get('SUPABASE', 'key', '')
        }

    @property
    def log_config(self):
        """Get logging configuration."""
        return {
            'level': self.get('LOGGING', 'level', 'INFO'),
            'format': self.get('LOGGING', 'format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
            'directory': self.get('LOGGING', 'directory', 'logs'),
            'max_size_mb': self.get_int('LOGGING', 'max_size_mb', 10),
            'backup_count': self.get_int('LOGGING', 'backup_count', 5),
            'console_output': self.get_boolean('LOGGING', 'console_output', True)
        }

    @property
    def import_config(self):
        """Get CSV import configuration."""
        return {
            'batch_size': self.get_int('IMPORT', 'batch_size', 100),
            'allowed_extension': self.get('IMPORT', 'allowed_extension', '.csv'),
            'sales_history_limit': self.get_int('IMPORT', 'sales_history_limit', 500)
        }

    @property
    def inventory_config(self):
        """Get inventory display and risk configuration."""
        return {
            'medium_risk_multiplier': self.get_float('INVENTORY', 'medium_risk_multiplier', 1.5),
            'items_per_page': self.get_int('INVENTORY', 'items_per_page', 10),
            'top_products': self.get_int('INVENTORY', 'top_products', 5)
        }

# Global config instance
config = Config()
