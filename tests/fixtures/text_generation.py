"""Canned text-generation answers.

The endpoint answers with plain text; these mirror what it returns for
the formatting and import prompts, with and without Markdown fences.
"""

from __future__ import annotations


TEXT_GENERATION_URL = "https://text.pollinations.ai/"

FORMATTED_RECIPE = """{
  "title": "Bratkartoffeln mit Spiegelei",
  "ingredients": [
    {"amount": "1 kg", "item": "Kartoffeln"},
    {"amount": "4", "item": "Eier"}
  ],
  "steps": ["Kartoffeln kochen.", "In der Pfanne braten.", "Eier dazugeben."]
}"""

FENCED_RECIPE = f"```json\n{FORMATTED_RECIPE}\n```"

NUMERIC_AMOUNTS_RECIPE = (
    '{"title": "Pfannkuchen", "ingredients": '
    '[{"amount": 250, "item": "Mehl"}, "Prise Salz"], "steps": ["Backen."]}'
)

NOT_JSON = "Hier ist dein Rezept: leider kein JSON."

RECIPE_PAGE_HTML = """<!doctype html>
<html>
  <head>
    <title>Omas Frikadellen</title>
    <style>body { color: red; }</style>
    <script>window.tracking = true;</script>
  </head>
  <body>
    <header>Rezepte-Portal Navigation</header>
    <nav><a href="/">Start</a></nav>
    <main>
      <h1>Omas   Frikadellen</h1>
      <ul><li>500g Hackfleisch</li><li>1 Brötchen</li></ul>
      <p>Alles vermengen und braten.</p>
    </main>
    <footer>Impressum</footer>
  </body>
</html>"""
