from typing import Optional
from bs4 import BeautifulSoup
from ..schemas.result import ProcessedResult, DisplayOptions, OutputFormat
import re

ORIGINALS_CLASS = "orig-brackets"
REPLACEMENT_CLASS = "replacement-text"

# Originals are assumed never to contain a literal "]"
TXT_ORIGINAL_PATTERN = re.compile(r"_\[[^\]]*\]")


def render(result: ProcessedResult, options: Optional[DisplayOptions] = None) -> str:
    """
    Produce the variant of the processed text selected by the display options.

    This is the variant used for saving: no display-only markup is added.
    Originals are stripped before highlighting, since replacement spans may
    sit inside the original-value markers in the HTML dialect.
    """
    if not options:
        options = DisplayOptions()

    content = result.content or ""
    if not content:
        return ""

    if not options.show_originals:
        content = remove_originals(content, result.format)

    if not options.show_highlighting:
        content = remove_highlighting(content, result.format)

    return content


def render_for_display(result: ProcessedResult, options: Optional[DisplayOptions] = None) -> str:
    """
    Same as :func:`render`, with line breaks made visible for plain text
    """
    content = render(result, options)
    if result.format == OutputFormat.txt:
        content = content.replace("\n", "\n<br>")
    return content


def remove_originals(content: str, output_format: str) -> str:
    """
    Remove the original (replaced) values from the text
    """
    if output_format == OutputFormat.html:
        soup = _parse_fragment(content)
        for element in soup.find_all(class_=ORIGINALS_CLASS):
            # Nested markers are already gone with their ancestor
            if not element.decomposed:
                element.decompose()
        return _serialize_fragment(soup)
    elif output_format == OutputFormat.txt:
        return TXT_ORIGINAL_PATTERN.sub("", content)

    # Unknown dialect, leave it alone
    return content


def remove_highlighting(content: str, output_format: str) -> str:
    """
    Replace highlighted replacement spans by their plain text content
    """
    if output_format == OutputFormat.txt:
        return content
    elif output_format == OutputFormat.html:
        soup = _parse_fragment(content)
        # Document order: an outer span is flattened before the ones inside it
        for element in soup.find_all(class_=REPLACEMENT_CLASS):
            element.replace_with(element.get_text())
        return _serialize_fragment(soup)

    return content


def _parse_fragment(content: str) -> BeautifulSoup:
    # html.parser keeps fragments as they are, without an <html><body> wrapper
    return BeautifulSoup(content, "html.parser")


def _serialize_fragment(soup: BeautifulSoup) -> str:
    return soup.decode(formatter="minimal")
