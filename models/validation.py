"""Validation models and enums for uploaded-file MIME checks."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from models.errors import InvalidOptionError, MissingOptionError

TRUE_VALUES = {"1", "true", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "no", "n", "off"}


class ValidationCode(Enum):
    """Result codes reported to callers. Several outcomes share ERR101."""

    SUCCESS = 0
    ERR101 = "ERR101"
    ERR102 = "ERR102"
    ERR103 = "ERR103"


class ValidationOutcome(Enum):
    """Discriminant for every terminal state of the validation pipeline."""

    ACCEPTED = "accepted"
    FILE_NOT_FOUND = "file_not_found"
    UNREADABLE = "unreadable"
    EXTENSION_NOT_ALLOWED = "extension_not_allowed"
    CONTENT_NOT_ALLOWED = "content_not_allowed"
    CSV_SHAPE_MISMATCH = "csv_shape_mismatch"
    PDF_SCRIPT_DETECTED = "pdf_script_detected"
    SVG_SCRIPT_DETECTED = "svg_script_detected"


OUTCOME_DETAILS: Mapping[ValidationOutcome, tuple] = {
    ValidationOutcome.ACCEPTED: (ValidationCode.SUCCESS, ""),
    ValidationOutcome.FILE_NOT_FOUND: (ValidationCode.ERR101, "File not found."),
    ValidationOutcome.UNREADABLE: (ValidationCode.ERR101, "Unable to read file."),
    ValidationOutcome.EXTENSION_NOT_ALLOWED: (ValidationCode.ERR101, "File type not allowed (extension)."),
    ValidationOutcome.CONTENT_NOT_ALLOWED: (ValidationCode.ERR101, "File type not allowed (content)."),
    ValidationOutcome.CSV_SHAPE_MISMATCH: (ValidationCode.ERR101, "File type not allowed (content)."),
    ValidationOutcome.PDF_SCRIPT_DETECTED: (ValidationCode.ERR102, "Embedded JavaScript detected in PDF."),
    ValidationOutcome.SVG_SCRIPT_DETECTED: (ValidationCode.ERR103, "Potential XSS risk: Dangerous SVG content."),
}


@dataclass(frozen=True)
class FileMetadata:
    """Uploaded file as handed over by the upload layer."""

    name: str
    size: int
    encoding: str
    mimetype: str
    md5: str
    temp_file_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Public fields only; the storage location is never reported."""
        return {
            "name": self.name,
            "size": self.size,
            "encoding": self.encoding,
            "mimetype": self.mimetype,
            "md5": self.md5,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Result of a single validation run."""

    outcome: ValidationOutcome
    file_data: Optional[FileMetadata] = None

    @property
    def is_valid(self) -> bool:
        return self.outcome is ValidationOutcome.ACCEPTED

    @property
    def code(self) -> ValidationCode:
        return OUTCOME_DETAILS[self.outcome][0]

    @property
    def message(self) -> str:
        return OUTCOME_DETAILS[self.outcome][1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "message": self.message,
            "code": self.code.value,
            "fileData": self.file_data.to_dict() if self.file_data else None,
        }


@dataclass(frozen=True)
class MimeValidatorConfig:
    """Service-wide settings for the MIME validator."""

    default_detect_pdf_scripts: bool = False
    default_detect_svg_scripts: bool = True
    csv_sniff_bytes: int = 2048


@dataclass(frozen=True)
class MimeValidationOptions:
    """Per-call options: what to accept, which upload to check, which scans to run."""

    accepts: str
    input_name: str
    detect_pdf_scripts: bool = False
    detect_svg_scripts: bool = True

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any], config: Optional[MimeValidatorConfig] = None
    ) -> "MimeValidationOptions":
        """
        Build options from a loosely typed mapping (form fields, JSON body).

        Args:
            options: Raw options; camelCase and snake_case keys are both accepted
            config: Supplies defaults for the optional scan flags

        Returns:
            MimeValidationOptions: Parsed options

        Raises:
            MissingOptionError: If ``accepts`` or ``input_name`` is absent or not a string
            InvalidOptionError: If a scan flag is not boolean-like
        """
        config = config or MimeValidatorConfig()
        accepts = _required_string(
            options.get("accepts"), "accepts", "A comma separated list of accepted MIME types is required."
        )
        input_name = _required_string(
            _first_present(options, "input_name", "inputName"), "input_name", "Input name is required."
        )
        detect_pdf = _optional_bool(
            _first_present(options, "detectPdfScripts", "detect_pdf_scripts"),
            "detectPdfScripts",
            config.default_detect_pdf_scripts,
        )
        detect_svg = _optional_bool(
            _first_present(options, "detectSvgScripts", "detect_svg_scripts"),
            "detectSvgScripts",
            config.default_detect_svg_scripts,
        )
        return cls(
            accepts=accepts,
            input_name=input_name,
            detect_pdf_scripts=detect_pdf,
            detect_svg_scripts=detect_svg,
        )


def _first_present(options: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if options.get(key) is not None:
            return options[key]
    return None


def _required_string(value: Any, option: str, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise MissingOptionError(option, message)
    return value


def _optional_bool(value: Union[bool, str, None], option: str, default: bool) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
    raise InvalidOptionError(option, f"Option '{option}' must be a boolean.")
