"""Literal placeholder substitution in the template's text files."""

import logging
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from apkgen.application.services.exceptions import WorkspaceError
from apkgen.domain.models.build_request import Placeholder
from apkgen.infrastructure.workspace.layout import SUBSTITUTION_TARGETS


logger = logging.getLogger(__name__)


def _read_text(path: Path) -> str:
    # newline="" keeps the template's line endings byte for byte
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_text(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


class ParameterSubstitutor:
    """Replaces placeholder tokens in a fixed list of workspace files.

    By default only the first occurrence of each token in a file is replaced,
    so a template must place each token at most once per file. With
    ``replace_all`` every occurrence is replaced.
    """

    def __init__(
        self,
        targets: Optional[Mapping[str, Sequence[Placeholder]]] = None,
        replace_all: bool = False,
    ):
        self.targets = dict(targets if targets is not None else SUBSTITUTION_TARGETS)
        self.replace_all = replace_all

    def replace(self, content: str, values: Mapping[str, str]) -> str:
        """Replace tokens by their values in a single scan of ``content``.

        Inserted values are never scanned again, so a value containing another
        token is written verbatim.
        """
        if not values:
            return content
        pattern = re.compile("|".join(re.escape(token) for token in values))
        seen: Dict[str, int] = {}

        def substitute(match: "re.Match[str]") -> str:
            token = match.group(0)
            seen[token] = seen.get(token, 0) + 1
            if seen[token] > 1 and not self.replace_all:
                return token
            return values[token]

        return pattern.sub(substitute, content)

    def substitute(self, workspace_path: Path, fields: Mapping[Placeholder, str]) -> None:
        """Rewrite every target file in place.

        Args:
            workspace_path: Root of the workspace
            fields: Value for each placeholder

        Raises:
            WorkspaceError: If a target file is missing or cannot be rewritten
        """
        for rel_path, placeholders in self.targets.items():
            target = Path(workspace_path) / rel_path
            try:
                content = _read_text(target)
            except OSError as e:
                logger.error("Template file %s unreadable in %s: %s", rel_path, workspace_path, e)
                raise WorkspaceError(f"Template file missing: {rel_path}") from e

            values = {p.token: fields[p] for p in placeholders if p in fields}
            content = self.replace(content, values)

            try:
                _write_text(target, content)
            except OSError as e:
                logger.error("Failed to write %s in %s: %s", rel_path, workspace_path, e)
                raise WorkspaceError(f"Failed to write {rel_path}") from e

        logger.debug("Substituted parameters in %s", workspace_path)

    def audit_template(self, template_dir: Path) -> Dict[str, Dict[Placeholder, int]]:
        """Count each placeholder token in each target file of a template.

        Missing target files are reported with an empty mapping.
        """
        report: Dict[str, Dict[Placeholder, int]] = {}
        for rel_path, placeholders in self.targets.items():
            target = Path(template_dir) / rel_path
            if not target.is_file():
                report[rel_path] = {}
                continue
            content = _read_text(target)
            report[rel_path] = {p: content.count(p.token) for p in placeholders}
        return report
