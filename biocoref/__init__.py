"""Coreference resolution for biomedical and clinical text."""

__version__ = "0.1.0"
__author__ = "biocoref"

from .core.configuration import Configuration
from .core.pipeline import CoreferencePipeline, ResolutionResult
from .core.resolver import resolve
from .core.types import CoreferenceType, ExpressionType
from .loader import load_document, load_document_file

__all__ = [
    "Configuration",
    "CoreferencePipeline",
    "ResolutionResult",
    "resolve",
    "CoreferenceType",
    "ExpressionType",
    "load_document",
    "load_document_file",
]
