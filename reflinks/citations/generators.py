"""
Citation Generators

Render page metadata as citation text for the inside of a <ref> tag.

Two styles are available:
- CiteTemplateGenerator: {{cite web |url=... |title=...}}
- PlainCs1Generator: plain CS1-style text with an external link

Both expose get_citation(metadata, date_format) and are deterministic for a
given generator instance; the access date is fixed when the generator is
created.
"""

from datetime import date
from typing import Optional, Union

from ..config.settings import ReflinksOptions
from ..models import DateFormat, Metadata

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def format_date(value: date, date_format: DateFormat = DateFormat.ISO) -> str:
    """
    Format a date in the article's preferred style.

    Examples:
        DateFormat.ISO -> "2020-01-02"
        DateFormat.DMY -> "2 January 2020"
        DateFormat.MDY -> "January 2, 2020"
    """
    month = MONTH_NAMES[value.month - 1]
    if date_format == DateFormat.DMY:
        return f"{value.day} {month} {value.year}"
    if date_format == DateFormat.MDY:
        return f"{month} {value.day}, {value.year}"
    return value.isoformat()


def _single_line(text: str) -> str:
    return " ".join(text.split())


class CiteTemplateGenerator:
    """Formats citations as {{cite web}} templates."""

    def __init__(self, options: Optional[ReflinksOptions] = None, access_date: Optional[date] = None):
        self.options = options or ReflinksOptions()
        self.access_date = access_date or date.today()

    @staticmethod
    def escape_parameter(text: str) -> str:
        """Escape characters that would break a template parameter."""
        text = _single_line(text)
        # Braces first, so the {{!}} inserted for pipes stays intact
        text = text.replace("{{", "&#123;&#123;")
        text = text.replace("}}", "&#125;&#125;")
        text = text.replace("|", "{{!}}")
        return text

    def get_citation(self, metadata: Metadata, date_format: DateFormat = DateFormat.ISO) -> str:
        """
        Format a single citation.

        Args:
            metadata: Metadata of the cited page
            date_format: Date style of the article

        Returns:
            Citation template string
        """
        params = [
            f"url={metadata.url}",
            f"title={self.escape_parameter(metadata.title)}",
        ]
        if self.options.use_author and metadata.author:
            params.append(f"author={self.escape_parameter(metadata.author)}")
        if self.options.use_date and metadata.published_date:
            params.append(f"date={format_date(metadata.published_date, date_format)}")
        if metadata.work:
            params.append(f"website={self.escape_parameter(metadata.work)}")
        if self.options.include_access_date:
            params.append(f"access-date={format_date(self.access_date, date_format)}")

        return "{{cite web |" + " |".join(params) + "}}"


class PlainCs1Generator:
    """Formats citations as plain CS1-style text."""

    def __init__(self, options: Optional[ReflinksOptions] = None, access_date: Optional[date] = None):
        self.options = options or ReflinksOptions()
        self.access_date = access_date or date.today()

    @staticmethod
    def escape_link_text(text: str) -> str:
        """Escape characters that would end an external link early."""
        text = _single_line(text)
        text = text.replace("[", "&#91;").replace("]", "&#93;")
        return text.replace('"', "'")

    def get_citation(self, metadata: Metadata, date_format: DateFormat = DateFormat.ISO) -> str:
        """
        Format a single citation.

        Pattern: Author (Date). [url "Title"]. ''Work''. Retrieved AccessDate.

        The result always ends with a period, so it is never mistaken for a
        bracketed bare link on a later pass.
        """
        author = metadata.author if self.options.use_author and metadata.author else None
        published = None
        if self.options.use_date and metadata.published_date:
            published = format_date(metadata.published_date, date_format)

        segments = []
        if author:
            author = _single_line(author)
            segments.append(f"{author} ({published})" if published else author)
        segments.append(f'[{metadata.url} "{self.escape_link_text(metadata.title)}"]')
        if metadata.work:
            segments.append(f"''{_single_line(metadata.work)}''")
        if published and not author:
            segments.append(published)
        if self.options.include_access_date:
            segments.append(f"Retrieved {format_date(self.access_date, date_format)}")

        return ". ".join(segments) + "."


CitationGenerator = Union[CiteTemplateGenerator, PlainCs1Generator]


def get_generator(
    options: Optional[ReflinksOptions] = None, access_date: Optional[date] = None
) -> CitationGenerator:
    """Pick the citation style configured in the options."""
    options = options or ReflinksOptions()
    if options.prefer_plain_citation_style:
        return PlainCs1Generator(options, access_date)
    return CiteTemplateGenerator(options, access_date)
