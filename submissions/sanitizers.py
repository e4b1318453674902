"""
Input Sanitization

Strips markup from free-text fields before they are validated or stored.
Tags are discarded rather than escaped; their visible text is kept.
"""
from bs4 import BeautifulSoup
from django.utils.html import strip_tags


# Elements whose content is not visible text are dropped together with it
NON_TEXT_TAGS = ['script', 'style', 'textarea', 'option', 'noscript', 'iframe', 'xmp']


def sanitize_text(value):
    """
    Remove all HTML tags and attributes from a string.

    Text content stays entity-escaped, so ``&lt;b&gt;`` in the input is
    kept as literal text rather than turned back into a tag.

    Non-string values are returned unchanged so that type validation
    can report them afterwards.
    """
    if not isinstance(value, str):
        return value

    soup = BeautifulSoup(value, 'html.parser')
    for element in soup.find_all(NON_TEXT_TAGS):
        element.decompose()

    return strip_tags(soup.decode(formatter='minimal')).strip()
