# populator/transform/loader.py

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from jinja2 import Environment, BaseLoader

from ..core.mixins import LoggingMixin


class RulesDocumentLoader(LoggingMixin):
    """
    Reads a rules document: the file is rendered as a Jinja2 template with the
    caller's context, then parsed as YAML.

    Templates see the context mapping plus ``env`` (the process environment).
    """

    def __init__(self, environment: Optional[Environment] = None):
        self._environment = environment or Environment(loader=BaseLoader(), autoescape=False)

    def render(self, text: str, context: Optional[Mapping[str, Any]] = None) -> str:
        variables: Dict[str, Any] = {'env': dict(os.environ)}
        if context:
            variables.update(context)
        return self._environment.from_string(text).render(**variables)

    def load(self, path: Union[str, Path], context: Optional[Mapping[str, Any]] = None) -> Optional[Any]:
        """
        Returns the parsed document, or None when the file does not exist or
        is empty. Read, template and YAML errors propagate.
        """
        document_path = Path(path)
        if not document_path.exists():
            self.log_warning("Rules document not found", document=str(document_path))
            return None

        try:
            text = document_path.read_text(encoding='utf-8')
            data = yaml.safe_load(self.render(text, context))
        except Exception as e:
            self.log_error("Failed to load rules document",
                           document=str(document_path),
                           error=str(e))
            raise

        self.log_debug("Rules document loaded", document=str(document_path))
        return data
