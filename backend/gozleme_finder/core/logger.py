import logging
import os
from logging.handlers import RotatingFileHandler


class LoggerConfig:
    """
    Logger configuration class to setup logging for the application.
    Console output is always on; a rotating log file is added when a
    log directory is given.
    """
    def __init__(
        self, env=20, logger_name="GozlemeFinder", log_directory=None, log_file="app.log"
    ):
        try:
            self.logger_name = logger_name
            self.log_file = log_file
            self.log_directory = os.path.abspath(log_directory) if log_directory else None
            self.env = env
            self.log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

            self.logger = logging.getLogger(self.logger_name)
            self.setup_logger()
        except Exception as e:
            print(f"Failed to initialize logger: {str(e)}")

    @property
    def log_file_path(self) -> str | None:
        if not self.log_directory:
            return None
        return os.path.join(self.log_directory, self.log_file)

    def setup_logger(self):
        try:
            formatter = logging.Formatter(self.log_format)

            # Drop handlers from a previous configuration
            for handler in list(self.logger.handlers):
                self.logger.removeHandler(handler)
                handler.close()

            # Console Handler
            console_handler = logging.StreamHandler()
            console_handler.setLevel(self.env)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

            # File Handler
            if self.log_directory:
                os.makedirs(self.log_directory, exist_ok=True)
                file_handler = RotatingFileHandler(
                    self.log_file_path, backupCount=5, maxBytes=1024 * 1024 * 10, encoding="utf-8"
                )
                file_handler.setLevel(self.env)
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)

            self.logger.setLevel(self.env)

        except Exception as e:
            print(f"Failed to setup logger handlers: {str(e)}")

    def configure(self, env: int, log_directory: str | None = None):
        """Re-apply level and file output, e.g. once settings are loaded."""
        self.env = env
        self.log_directory = os.path.abspath(log_directory) if log_directory else None
        self.setup_logger()

    def log(self, level: int, message: str, extra: dict = None):
        """Simple wrapper to log messages"""
        if extra:
            message = f"{message} | {extra}"
        self.logger.log(level, message)


# Initialize Logger; the server and the cache builder reconfigure it from settings
logs = LoggerConfig(
    env=logging.INFO,
    logger_name="GOZLEME-BE",
    log_directory=None,
    log_file="app.log"
)
