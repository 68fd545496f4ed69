from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from pagesmith.render.resolve import resolve
from pagesmith.render.scanner import ComponentPlaceholder, Sentinel, scan
from pagesmith.render.template import DEFAULT_COMPONENTS, default_template, read_template


class TestDefaultTemplateContract(unittest.TestCase):
    def test_has_eight_components_in_order_and_both_sentinels(self) -> None:
        toks = scan(default_template())
        names = [t.name for t in toks if isinstance(t, ComponentPlaceholder)]
        self.assertEqual(names, list(DEFAULT_COMPONENTS))
        self.assertEqual(len(names), 8)
        sentinels = [t.name for t in toks if isinstance(t, Sentinel)]
        self.assertEqual(sentinels, ["CSS_LINKS", "JS_SCRIPTS"])

    def test_css_sentinel_in_head_js_sentinel_before_body_end(self) -> None:
        html = default_template()
        self.assertLess(html.index("{{CSS_LINKS}}"), html.index("</head>"))
        self.assertLess(html.index("{{JS_SCRIPTS}}"), html.index("</body>"))
        self.assertTrue(html.startswith("<!DOCTYPE html>"))

    def test_resolves_site_config_paths(self) -> None:
        data = {"site-config": {"site": {"name": "Investimus"}, "seo": {"description": "Invest"}}}
        html = resolve(default_template(), data, {})
        self.assertIn("<title>Investimus</title>", html)
        self.assertIn('<meta name="description" content="Invest">', html)

    def test_read_template_prefers_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "page.html"
            self.assertEqual(read_template(p), (default_template(), True))
            p.write_bytes(b"<p>{{x}}</p>\r\n")
            self.assertEqual(read_template(p), ("<p>{{x}}</p>\r\n", False))


if __name__ == "__main__":
    unittest.main(verbosity=2)
