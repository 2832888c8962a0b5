"""Placeholder substitution for the Argo CD project template.

The template is plain text; only the placeholders listed below are
recognised. Values are inserted literally, so characters such as ``/``,
``\\`` or ``&`` in a server URL are never treated as pattern syntax.
"""

import re
from pathlib import Path
from typing import Iterable, Mapping

from dvops.core.exceptions import RenderEmptyError, TemplateNotFoundError, TemplateUnreadableError

PROJECT = "{{ .project }}"
DESTINATION_CLUSTER = "{{ .destinationCluster }}"
DESTINATION_SERVER = "{{ .destinationServer }}"
SYNC_WAVE = '{{ default "0" .syncWave }}'

#: Left in place for the templating pass that creates applications.
PASS_THROUGH_TOKENS: tuple[str, ...] = (
    "{{ .appName }}",
    "{{ .userGivenName }}",
    "{{ .destNamespace }}",
    "{{ .helmChartURL }}",
    "{{ .helmChartVersion }}",
    "{{ .helmChartName }}",
)

DEFAULT_SYNC_WAVE = "0"


def build_substitutions(project_name: str, cluster_name: str, server_url: str) -> dict[str, str]:
    """Build the full placeholder map for a project file.

    Pass-through tokens map to themselves so the vocabulary is closed.
    """
    substitutions = {
        PROJECT: project_name,
        DESTINATION_CLUSTER: cluster_name,
        DESTINATION_SERVER: server_url,
        SYNC_WAVE: DEFAULT_SYNC_WAVE,
    }
    substitutions.update({token: token for token in PASS_THROUGH_TOKENS})
    return substitutions


def render(template_lines: Iterable[str], substitutions: Mapping[str, str]) -> list[str]:
    """Replace every occurrence of each known placeholder, line by line.

    Placeholders missing from ``substitutions`` are copied verbatim.
    """
    if not substitutions:
        return list(template_lines)

    pattern = re.compile("|".join(re.escape(token) for token in sorted(substitutions, key=len, reverse=True)))
    return [pattern.sub(lambda m: substitutions[m.group(0)], line) for line in template_lines]


def read_template(path: Path) -> list[str]:
    """Read a template keeping line endings.

    Raises:
        TemplateNotFoundError: If the file does not exist or cannot be opened
        TemplateUnreadableError: If the file is not UTF-8 text
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.readlines()
    except UnicodeDecodeError as e:
        raise TemplateUnreadableError(str(path), details={"error": str(e)}) from e
    except OSError as e:
        raise TemplateNotFoundError(str(path), details={"error": e.strerror or str(e)}) from e


def render_file(template_path: Path, substitutions: Mapping[str, str]) -> str:
    """Render a template file to a string.

    Raises:
        TemplateNotFoundError: If the template is missing
        RenderEmptyError: If the result holds nothing but whitespace
    """
    rendered = "".join(render(read_template(template_path), substitutions))
    if not rendered.strip():
        raise RenderEmptyError(str(template_path))
    return rendered
