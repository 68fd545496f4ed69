# pagesmith/render/template.py
from __future__ import annotations

from pathlib import Path
from typing import Tuple

from ..errors import FatalLoadError

DEFAULT_COMPONENTS: Tuple[str, ...] = (
    "header",
    "hero",
    "services",
    "about",
    "testimonials",
    "faq",
    "contact",
    "footer",
)

HTML_SHELL = r"""<!DOCTYPE html>
<html lang="pt-BR">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{site-config.site.name}}</title>
    <meta name="description" content="{{site-config.seo.description}}">

    <!-- Preconnect to external domains -->
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link rel="preconnect" href="https://cdn.tailwindcss.com">

    <!-- Tailwind CSS -->
    <script src="https://cdn.tailwindcss.com"></script>

    <!-- Google Fonts -->
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&family=Plus+Jakarta+Sans:wght@500;600;700;800&display=swap" rel="stylesheet">

    {{CSS_LINKS}}
</head>
<body>
    <main id="main-content">
__COMPONENTS__
    </main>

    {{JS_SCRIPTS}}
</body>
</html>"""


def default_template() -> str:
    body = "\n".join(f"        {{{{component:{name}}}}}" for name in DEFAULT_COMPONENTS)
    return HTML_SHELL.replace("__COMPONENTS__", body)


def read_template(path: Path) -> Tuple[str, bool]:
    """Return (template_text, used_fallback)."""
    try:
        return path.read_bytes().decode("utf-8"), False
    except FileNotFoundError:
        return default_template(), True
    except (OSError, UnicodeDecodeError) as e:
        raise FatalLoadError(f"Failed to read template {path}: {e}", path=path) from e
