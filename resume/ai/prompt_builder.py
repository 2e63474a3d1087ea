# resume/ai/prompt_builder.py
"""
Typed prompt templates with <<name>> parameter markers

JSON schema descriptions inside templates use literal braces, so
parameters are marked with double angle brackets instead.
"""

import json
import logging
import re
from typing import Any, Dict, FrozenSet, Mapping

from resume.errors import PromptTemplateError

logger = logging.getLogger(__name__)

MARKER_PATTERN = re.compile(r"<<([A-Za-z_][A-Za-z0-9_]*)>>")


class PromptTemplate:
    """
    A template that knows which parameters it needs

    Substitution is a single pass over the template text. Values are
    inserted verbatim and never rescanned, so parameter content cannot
    open or close a marker.
    """

    def __init__(self, template_id: str, text: str):
        self.template_id = template_id
        self.text = text
        self.parameters: FrozenSet[str] = frozenset(MARKER_PATTERN.findall(text))

    def render(self, parameters: Mapping[str, Any]) -> str:
        """
        Render the template

        Raises:
            PromptTemplateError: A declared parameter is missing or an
                undeclared one was supplied
        """
        supplied = set(parameters)
        missing = self.parameters - supplied
        if missing:
            raise PromptTemplateError(
                f"Template '{self.template_id}' missing parameters: {', '.join(sorted(missing))}"
            )
        unknown = supplied - self.parameters
        if unknown:
            raise PromptTemplateError(
                f"Template '{self.template_id}' got unknown parameters: {', '.join(sorted(unknown))}"
            )

        values = {name: _stringify(value) for name, value in parameters.items()}
        return MARKER_PATTERN.sub(lambda m: values[m.group(1)], self.text)

    def __repr__(self):
        return f"<PromptTemplate: {self.template_id} params={sorted(self.parameters)}>"


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False)


class PromptBuilder:
    """Registry of templates addressed by id"""

    def __init__(self, templates: Dict[str, PromptTemplate] = None):
        if templates is None:
            from resume.ai.templates import DEFAULT_TEMPLATES
            templates = DEFAULT_TEMPLATES
        self.templates = dict(templates)

    def register(self, template: PromptTemplate):
        self.templates[template.template_id] = template

    def build(self, template_id: str, parameters: Mapping[str, Any]) -> str:
        template = self.templates.get(template_id)
        if template is None:
            raise PromptTemplateError(f"Unknown template: {template_id}")

        prompt = template.render(parameters)
        logger.debug(f"Built '{template_id}' prompt ({len(prompt)} chars)")
        return prompt
