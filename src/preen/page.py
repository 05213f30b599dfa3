"""Preview page shell served at ``/``.

Wraps the current document in github-markdown-css chrome and a small
native-EventSource script: every ``/updates`` message carries
``{"html": ...}`` and replaces the content of ``#content`` in place.
"""

from __future__ import annotations

import html

UPDATES_ENDPOINT = "/updates"
VENDOR_CSS_PREFIX = "/github-markdown-css"

_PAGE = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <link rel="stylesheet" href="{css_prefix}/github-markdown.min.css">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <style>
    .markdown-body {{
      box-sizing: border-box;
      min-width: 200px;
      max-width: 980px;
      margin: 0 auto;
      padding: 45px;
    }}

    @media (max-width: 767px) {{
      .markdown-body {{
        padding: 15px;
      }}
    }}
  </style>
</head>
<body>
  <article class="markdown-body" id="content">
{document}
  </article>
  <script data-preen-live>
  (function() {{
    var src = new EventSource('{updates}');
    src.onmessage = function(e) {{
      var data = JSON.parse(e.data);
      document.getElementById('content').innerHTML = data.html;
    }};
  }})();
  </script>
</body>
</html>
"""


def render_page(document: str, *, title: str = "Markdown Preview") -> str:
    """Return the full HTML page embedding *document* inline."""
    return _PAGE.format(
        title=html.escape(title),
        css_prefix=VENDOR_CSS_PREFIX,
        document=document,
        updates=UPDATES_ENDPOINT,
    )
