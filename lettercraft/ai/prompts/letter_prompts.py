"""
Letter Prompts - fixed instructions sent ahead of every letter prompt.

The generated text is dropped straight into a rich-text editor, so the
model is restricted to a small set of HTML tags and must not emit markdown.
"""

# ---------------------------------------------------------------------------
# HTML ALLOW-LIST
# ---------------------------------------------------------------------------

ALLOWED_HTML_TAGS = ("p", "h1", "h2", "h3", "ul", "ol", "li", "strong", "em")


# ---------------------------------------------------------------------------
# LETTER SYSTEM INSTRUCTION
# ---------------------------------------------------------------------------

LETTER_SYSTEM_INSTRUCTION = """
You are an HR assistant. Generate a professional business letter in clean HTML.
Use <p>, <h1>-<h3>, <ul>, <ol>, <li>, <strong>, <em> tags.
Do NOT use markdown (**bold**, --, or |).
"""


# Substituted when the model answers without any text part
EMPTY_RESPONSE_PLACEHOLDER = "⚠️ AI did not return any text."
