"""Template lookup and request validation.

The catalog maps template ids to parsed ``PosterTemplate`` records and
checks that a request's field map covers every text field of a template.
"""

from collections.abc import Iterable, Mapping
from pathlib import Path

from poster_composer.templates.builtin import BUILTIN_TEMPLATES
from poster_composer.templates.models import PosterTemplate
from poster_composer.utils.exceptions import InvalidInputError, TemplateNotFoundError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


class TemplateCatalog:
    """Looks up and validates poster templates.

    Example:
        >>> catalog = default_catalog()
        >>> template = catalog.lookup("classic")
        >>> catalog.validate(template, {"athleteName": "Ana"})
        Traceback (most recent call last):
        ...
        InvalidInputError: Missing required data fields: achievement, tournamentName, date
    """

    def __init__(self, templates: Iterable[PosterTemplate] = ()):
        """Initialize the catalog.

        Args:
            templates: Templates to register up front
        """
        self._templates: dict[str, PosterTemplate] = {}
        for template in templates:
            self.register(template)

    def register(self, template: PosterTemplate) -> None:
        """Add a template, replacing any template with the same id."""
        if template.id in self._templates:
            logger.debug(f"Replacing template '{template.id}'")
        self._templates[template.id] = template

    def lookup(self, template_id: str) -> PosterTemplate:
        """Get a template by id.

        Raises:
            TemplateNotFoundError: If the id is unknown
        """
        template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    def list_templates(self) -> list[str]:
        """Ids of every registered template, sorted."""
        return sorted(self._templates)

    def load_directory(self, directory: str | Path) -> list[str]:
        """Register every ``*.json`` template in a directory.

        Args:
            directory: Folder containing template JSON files

        Returns:
            Ids of the templates that were loaded

        Raises:
            InvalidInputError: If the directory does not exist or a file
                holds a malformed template
        """
        path = Path(directory)
        if not path.is_dir():
            raise InvalidInputError(f"Template directory not found: {path}", field="templates_dir")

        loaded = []
        for json_file in sorted(path.glob("*.json")):
            template = PosterTemplate.from_json(json_file)
            self.register(template)
            loaded.append(template.id)

        logger.info(f"Loaded {len(loaded)} templates from {path}")
        return loaded

    @staticmethod
    def validate(template: PosterTemplate, data: Mapping[str, str | None]) -> None:
        """Check that every text field of the template has a value.

        A value that is absent, None or empty counts as missing. All
        missing ids are reported together so callers can fix every problem
        from a single error.

        Raises:
            InvalidInputError: Listing every missing field id
        """
        missing_fields = [
            field_id for field_id in template.field_ids
            if data.get(field_id) is None or data.get(field_id) == ""
        ]

        if missing_fields:
            raise InvalidInputError(
                f"Missing required data fields: {', '.join(missing_fields)}",
                missing_fields=missing_fields,
            )

        logger.debug(f"Data validated for template '{template.id}'")


def default_catalog() -> TemplateCatalog:
    """Build a catalog holding the built-in templates."""
    return TemplateCatalog(PosterTemplate.from_dict(record) for record in BUILTIN_TEMPLATES)
