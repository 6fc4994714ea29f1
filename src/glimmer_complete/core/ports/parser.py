from typing import Protocol

from glimmer_complete.core.template_ast import Template


class TemplateParser(Protocol):
    def parse(self, text: str) -> Template: ...
