import logging

import colorlog

LOG_FORMAT = (
    "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s "
    "%(blue)s%(name)s%(reset)s - %(message)s"
)


def configure_logging(level="INFO"):
    """Attach a colored console handler to the root logger once."""
    root = logging.getLogger()
    root.setLevel(level)

    if any(getattr(handler, "_lms_handler", False) for handler in root.handlers):
        return

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
    ))
    handler._lms_handler = True
    root.addHandler(handler)
