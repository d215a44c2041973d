"""Domain layer: errors, constants and schemas."""

from .constants import CONTENT_TYPES, FILE_EXTENSIONS, ExportFormat
from .errors import (
    ErrorCodes,
    ExportError,
    InvalidTemplateConfigurationError,
    MissingTimeParameterError,
    RenderFailedError,
    ResourceNotFoundError,
    UnsupportedFormatError,
)
from .schemas import (
    DataSet,
    DataSetColumn,
    EvaluatedReportData,
    EvaluationContext,
    ExportedArtifact,
    RenderConfiguration,
    ReportDescriptor,
    ReportIdentity,
    TemplateResource,
)

__all__ = [
    # constants
    "ExportFormat",
    "CONTENT_TYPES",
    "FILE_EXTENSIONS",
    # errors
    "ErrorCodes",
    "ExportError",
    "UnsupportedFormatError",
    "InvalidTemplateConfigurationError",
    "ResourceNotFoundError",
    "RenderFailedError",
    "MissingTimeParameterError",
    # schemas
    "ReportIdentity",
    "TemplateResource",
    "ReportDescriptor",
    "DataSetColumn",
    "DataSet",
    "EvaluationContext",
    "EvaluatedReportData",
    "RenderConfiguration",
    "ExportedArtifact",
]
