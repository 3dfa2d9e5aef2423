import os
import sys
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Logger:
    """
    Named logger writing to the console and, when file_path is given, to
    <file_path>/<name>.log. Several Logger objects with the same name share
    one set of handlers.
    """

    def __init__(self, name: str, file_path: str = None, level: int = logging.INFO):
        self.name = name
        self.file_path = file_path
        self.logger = logging.getLogger(f"droptension.{name}")
        self.logger.setLevel(level)
        self.logger.propagate = False
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        if not any(
            type(handler) is logging.StreamHandler for handler in self.logger.handlers
        ):
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if file_path is not None:
            os.makedirs(file_path, exist_ok=True)
            log_file = os.path.abspath(os.path.join(file_path, f"{name}.log"))
            if not any(
                isinstance(handler, logging.FileHandler)
                and handler.baseFilename == log_file
                for handler in self.logger.handlers
            ):
                file_handler = logging.FileHandler(log_file, encoding="utf-8")
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)

    def debug(self, message: str):
        self.logger.debug(message)

    def info(self, message: str):
        self.logger.info(message)

    def warning(self, message: str):
        self.logger.warning(message)

    def error(self, message: str):
        self.logger.error(message)
