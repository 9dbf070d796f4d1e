"""Template store interface."""

from typing import Protocol

from cadence.core.models import Template


class TemplateStore(Protocol):
    """Interface for reading process templates."""

    def get_template(self, template_id: str) -> Template | None:
        """Fetch a template by id. Returns None if not found."""
        ...

    def list_templates(self) -> list[Template]:
        """Fetch all templates."""
        ...
