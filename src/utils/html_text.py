"""Conversion of HTML pages into plain readable text."""

from urllib.parse import urlparse

from bs4 import BeautifulSoup, Comment

NON_TEXT_ELEMENTS = ["script", "style", "noscript", "template"]


def is_valid_url(url: str) -> bool:
    """Check that URL uses HTTP(S) scheme and has a host."""
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def html_to_text(content: str) -> str:
    """Extract readable text from HTML content.

    Scripts, styles and comments are dropped, every text node ends up on its
    own line with whitespace collapsed. Page title and meta description,
    when present, are put in front of the text.
    """
    soup = BeautifulSoup(content, "html.parser")
    for element in soup(NON_TEXT_ELEMENTS):
        element.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    title = ""
    if soup.title is not None:
        title = soup.title.get_text(" ", strip=True)
        # title is put in front of the text
        soup.title.decompose()

    description = ""
    meta = soup.find("meta", attrs={"name": "description"})
    if meta is not None:
        description = " ".join(str(meta.get("content") or "").split())

    lines = (" ".join(line.split()) for line in soup.get_text("\n").splitlines())
    text = "\n".join(line for line in lines if line)

    parts = []
    if title:
        parts.append(f"# {title}\n")
    if description:
        parts.append(f"> {description}\n")
    if text:
        parts.append(text)
    return "\n".join(parts)
