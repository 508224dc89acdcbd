# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Template rendering."""

from chaingen.rendering.template_engine import DEFAULT_TEMPLATES_DIR, TemplateEngine

__all__: list[str] = ["DEFAULT_TEMPLATES_DIR", "TemplateEngine"]
