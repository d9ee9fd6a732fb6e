"""Custom exception classes for the poster_composer package.

This module defines the error taxonomy of the composition engine. Every
error carries structured attributes and builds a readable message from
them, so callers can either show the message or inspect the fields.
"""


class PosterComposerError(Exception):
    """Base exception for all poster_composer errors.

    Catch this to handle every typed engine failure in one place.
    """

    pass


class TemplateNotFoundError(PosterComposerError):
    """Raised when a template id is not present in the catalog.

    Attributes:
        template_id: The id that was looked up
    """

    def __init__(self, template_id: str) -> None:
        """Initialize with the unknown template id.

        Args:
            template_id: Template id that could not be found
        """
        self.template_id = template_id
        super().__init__(f"Template not found: '{template_id}'")


class InvalidInputError(PosterComposerError):
    """Raised when caller-supplied input is malformed or incomplete.

    This exception is raised when:
    - Required data fields are missing (all of them are listed)
    - Photo bytes cannot be decoded
    - A fill, mask, color or output option is malformed
    - A font registration request is invalid

    Attributes:
        field: Optional name of the offending field
        missing_fields: Every missing data field id, when applicable
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        missing_fields: list[str] | None = None,
    ) -> None:
        """Initialize with error details.

        Args:
            message: Description of the error
            field: Name of the offending field
            missing_fields: Missing data field ids
        """
        self.field = field
        self.missing_fields = list(missing_fields or [])

        error_parts = [message]
        if field:
            error_parts.append(f"(field: {field})")

        super().__init__(" ".join(error_parts))


class ColorParseError(InvalidInputError):
    """Raised when a color specification cannot be parsed.

    Attributes:
        color_spec: Color specification that failed to parse
        expected_format: Expected format (optional)
    """

    def __init__(
        self,
        message: str,
        color_spec: str | None = None,
        expected_format: str | None = None,
    ) -> None:
        """Initialize with color parsing error details.

        Args:
            message: Description of the error
            color_spec: Color specification that was provided
            expected_format: Description of expected format
        """
        self.color_spec = color_spec
        self.expected_format = expected_format

        error_parts = [message]
        if color_spec is not None:
            error_parts = [f"{message}: '{color_spec}'"]
        if expected_format:
            error_parts.append(f"(expected format: {expected_format})")

        super().__init__(" ".join(error_parts))


class FontLoadError(PosterComposerError):
    """Raised when an explicitly registered font cannot be loaded.

    Attributes:
        font_name: Family name the font was registered under
        reason: Why loading failed
    """

    def __init__(self, font_name: str, reason: str) -> None:
        """Initialize with font loading error details.

        Args:
            font_name: Font family name
            reason: Description of the failure
        """
        self.font_name = font_name
        self.reason = reason
        super().__init__(f"Failed to load font '{font_name}': {reason}")


class ImageProcessingError(PosterComposerError):
    """Raised when raster work or encoding fails.

    This is the catch-all at the orchestrator boundary: any failure that is
    not already typed is wrapped into it with the original message.

    Attributes:
        stage: Stage of composition where the error occurred
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        details: str | None = None,
    ) -> None:
        """Initialize with image processing error details.

        Args:
            message: Description of the error
            stage: Stage where error occurred (e.g., "rendering-text")
            details: Additional technical details
        """
        self.stage = stage
        self.details = details

        error_parts = [message]
        if stage:
            error_parts.append(f"during {stage}")
        if details:
            error_parts.append(f"({details})")

        super().__init__(" ".join(error_parts))
