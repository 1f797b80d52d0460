"""
Template loading and placeholder substitution
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..core import config
from ..core.errors import TemplateNotFound

logger = logging.getLogger(__name__)

# "{{NAME}}", optionally preceded by a "//" line comment marker
TOKEN_RE = re.compile(r"(//[ \t]*)?\{\{([A-Za-z0-9_]+)\}\}")


class TemplateStore:
    """Templates stored as <name>.sol files in one directory"""

    def __init__(self, templates_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            templates_dir: Template directory (default: CHAINSPEC_TEMPLATES_DIR
                or the templates shipped with the package)
        """
        self.templates_dir = Path(templates_dir) if templates_dir else config.templates_dir()

    def path_for(self, template_name: str) -> Path:
        return self.templates_dir / f"{template_name}{config.TEMPLATE_SUFFIX}"

    def load(self, template_name: str) -> str:
        """
        Read template text.

        Raises:
            TemplateNotFound: If no template file exists for the name
        """
        path = self.path_for(template_name)
        # Names are plain identifiers, never paths
        if Path(template_name).name != template_name or not path.is_file():
            raise TemplateNotFound(template_name, str(self.templates_dir))

        logger.debug("Loading template %s from %s", template_name, path)
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def names(self) -> List[str]:
        """Available template names, sorted"""
        if not self.templates_dir.is_dir():
            return []
        return sorted(p.stem for p in self.templates_dir.glob(f"*{config.TEMPLATE_SUFFIX}"))


def substitute(template: str, values: Dict[str, str]) -> str:
    """
    Replace every {{TOKEN}} found in `values` in a single pass.

    A "//" marker directly before a token is replaced along with it, so
    empty content leaves no dangling comment. Unknown tokens are kept
    verbatim.
    """
    def replace(match: "re.Match[str]") -> str:
        name = match.group(2)
        if name not in values:
            return match.group(0)
        return values[name]

    return TOKEN_RE.sub(replace, template)


def find_tokens(text: str) -> List[str]:
    """Token names still present in text, in order of appearance"""
    return [match.group(2) for match in TOKEN_RE.finditer(text)]
