from teamdrive.utils.logging import get_logger, setup_logging, log_with_context
from teamdrive.utils.api_response import ok, created, no_content, attachment_disposition
from teamdrive.utils.file_classifier import FileClassifier


__all__= [
    "get_logger",
    "setup_logging",
    "log_with_context",
    "ok",
    "created",
    "no_content",
    "attachment_disposition",
    "FileClassifier",
]
