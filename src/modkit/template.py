"""Literal token substitution for stub files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import TemplateNotFoundError

__all__ = [
    "StubRenderer",
    "TemplateNotFoundError",
]


_STUB_TOKEN_PATTERN = re.compile(r"Dummy[A-Z][A-Za-z]*")


@dataclass(slots=True)
class StubRenderer:
    """Render stubs by replacing ``Dummy*`` style tokens with literal values."""

    encoding: str = "utf-8"

    def render_string(self, stub: str, replacements: Mapping[str, object]) -> str:
        """Replace every token of ``replacements`` found in ``stub``.

        All tokens are substituted in a single pass. When one token is a
        prefix of another the longer one wins, and substituted text is never
        scanned again, so a value that happens to contain a token is written
        out verbatim.
        """

        tokens = sorted((token for token in replacements if token), key=len, reverse=True)
        if not tokens:
            return stub

        pattern = re.compile("|".join(re.escape(token) for token in tokens))
        return pattern.sub(lambda match: str(replacements[match.group(0)]), stub)

    def render_file(
        self,
        stub_path: str | Path,
        replacements: Mapping[str, object],
        *,
        target: str | Path | None = None,
    ) -> str:
        """Render ``stub_path`` and optionally write the result to ``target``."""

        stub_path = Path(stub_path)
        if not stub_path.is_file():
            raise TemplateNotFoundError(f"stub {stub_path} does not exist")

        text = stub_path.read_text(encoding=self.encoding)
        rendered = self.render_string(text, replacements)

        if target is not None:
            target_path = Path(target)
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(rendered, encoding=self.encoding)

        return rendered

    @staticmethod
    def leftover_tokens(text: str) -> list[str]:
        """Return the distinct ``Dummy*`` tokens still present in ``text``."""

        return sorted(set(_STUB_TOKEN_PATTERN.findall(text)))
