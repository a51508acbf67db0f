"""
Reflinks Fixer

Fills in bare references: every <ref> marker of an article is classified,
checked against the spam blacklist, looked up through a link handler and
rewritten as a full citation. Duplicate references are merged into one
named citation plus stubs.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Protocol

from .citations.classifier import classify
from .citations.duplicate_index import DuplicateIndex
from .citations.generators import CitationGenerator, get_generator
from .citations.identifier import NAME_ATTRIBUTE, synthesize_identifier
from .citations.rewriter import CitationRewriter, merge_attributes, split_by_name
from .citations.scanner import list_citations
from .config.settings import ReflinksOptions
from .exceptions import LinkHandlerError, WikiError
from .handlers.spider import Spider
from .handlers.standalone import StandaloneLinkHandler
from .models import (
    CitationMarker,
    DateFormat,
    FailureCode,
    FixLog,
    FixOutcome,
    Metadata,
    ReflinksResult,
    ResultStatus,
    SkipReason,
    SourceKind,
    get_skipped_reason,
)
from .spam_filter import SpamFilter
from .utils.wiki_utils import (
    detect_date_format,
    generate_wiki_timestamp,
    parse_wiki_timestamp,
    remove_bare_url_tags,
)
from .wiki import WikiProvider

logger = logging.getLogger(__name__)


class LinkHandler(Protocol):
    def get_metadata(self, url: str) -> Metadata: ...

    def explain_error_code(self, code: int) -> str: ...


@dataclass
class _PassContext:
    """State shared by every marker of one fix pass."""

    index: DuplicateIndex
    rewriter: CitationRewriter
    date_format: DateFormat
    log: FixLog


@dataclass
class CitationResult:
    """What happened to a single marker."""

    marker: CitationMarker
    fixed: bool = False
    url: Optional[str] = None
    reason: Optional[SkipReason] = None


class Reflinks:
    """Bare reference filler."""

    def __init__(
        self,
        options: Optional[ReflinksOptions] = None,
        link_handler: Optional[LinkHandler] = None,
        spam_filter: Optional[SpamFilter] = None,
        wiki_provider: Optional[WikiProvider] = None,
        spider: Optional[Spider] = None,
        generator: Optional[CitationGenerator] = None,
        access_date: Optional[date] = None,
    ):
        """
        Initialize the fixer.

        Args:
            options: Fixer options (defaults apply when omitted)
            link_handler: Metadata source; defaults to StandaloneLinkHandler
            spam_filter: URL blacklist; defaults to the options' patterns
            wiki_provider: Resolves wiki codes for get_result()
            spider: HTTP client shared by the handler and the wiki provider
            generator: Citation generator; defaults to the configured style
            access_date: Access date written into citations
        """
        self.options = options or ReflinksOptions()
        self.spider = spider or Spider(
            user_agent=self.options.user_agent,
            timeout=self.options.request_timeout,
            max_attempts=self.options.max_fetch_attempts,
        )
        self.link_handler = link_handler or StandaloneLinkHandler(self.spider)
        self.spam_filter = spam_filter or SpamFilter(self.options.spam_blacklist)
        self.wiki_provider = wiki_provider or WikiProvider()
        self.generator = generator or get_generator(self.options, access_date)

    def fix(self, text: str) -> FixOutcome:
        """
        Fill in the bare references of a piece of wikitext.

        Args:
            text: Article wikitext

        Returns:
            FixOutcome with the new wikitext and the fixed/skipped log
        """
        markers = list_citations(text)
        context = _PassContext(
            index=DuplicateIndex(markers),
            rewriter=CitationRewriter(text),
            date_format=detect_date_format(text),
            log=FixLog(),
        )
        logger.debug(f"Found {len(markers)} references, date format {context.date_format.value}")

        for marker in markers:
            if context.rewriter.is_rewritten(marker):
                continue
            try:
                result = self._process_citation(marker, context)
                if result.reason is not None:
                    logger.debug(
                        f"Reference #{marker.index} skipped: {get_skipped_reason(result.reason)}"
                    )
            except Exception as e:
                logger.error(f"Unexpected error while processing reference #{marker.index}: {e}")
                context.log.add_skipped(marker.content, SkipReason.UNKNOWN, description=str(e))

        logger.info(
            f"Fixed {len(context.log.fixed)} reference(s), skipped {len(context.log.skipped)}"
        )
        return FixOutcome(text=context.rewriter.export_wikitext(), log=context.log)

    def _process_citation(self, marker: CitationMarker, context: _PassContext) -> CitationResult:
        """Run one marker through classify, spam check, fetch and rewrite."""
        result = CitationResult(marker=marker)
        core = marker.content

        reference = classify(core, self.options)
        if reference is None:
            return result
        result.url = reference.url

        if self.spam_filter.check(reference.url):
            logger.info(f"Skipping blacklisted URL {reference.url}")
            context.log.add_skipped(core, SkipReason.SPAM, status=0)
            result.reason = SkipReason.SPAM
            return result

        try:
            metadata = self.link_handler.get_metadata(reference.url)
        except LinkHandlerError as e:
            description = e.message or self.link_handler.explain_error_code(e.code)
            logger.warning(f"Could not retrieve {reference.url}: {description}")
            context.log.add_skipped(core, SkipReason.HANDLER, description=description)
            result.reason = SkipReason.HANDLER
            return result

        if not metadata.title:
            logger.info(f"No title found for {reference.url}")
            context.log.add_skipped(core, SkipReason.NOTITLE, status=metadata.status_code)
            result.reason = SkipReason.NOTITLE
            return result

        citation = self.generator.get_citation(metadata, context.date_format)

        if context.index.has_duplicates(core):
            group = context.index.group_by_content(core)
            # Members already named differently keep their own names
            for members in split_by_name(group):
                if len(members) == 1:
                    context.rewriter.rewrite_simple(members[0], citation)
                    continue
                attributes = merge_attributes(members)
                attributes[NAME_ATTRIBUTE] = synthesize_identifier(
                    attributes, metadata, context.index
                )
                context.rewriter.rewrite_duplicates(members, citation, attributes)
        else:
            context.rewriter.rewrite_simple(marker, citation)

        logger.info(f"Fixed {reference.url}")
        context.log.add_fixed(reference.url)
        result.fixed = True
        return result

    def get_result(
        self,
        text: Optional[str] = None,
        page: Optional[str] = None,
        wiki: Optional[str] = None,
    ) -> ReflinksResult:
        """
        Acquire the source wikitext, fix it and build the edit summary.

        Args:
            text: Literal wikitext; takes precedence over page
            page: Title of a page to fetch
            wiki: Wiki code for page (defaults to options.default_wiki)

        Returns:
            ReflinksResult; pass-level failures are reported, not raised
        """
        result = ReflinksResult()

        if text:
            result.old = text
            result.source = SourceKind.TEXT
        elif page:
            site = self.wiki_provider.get_wiki(wiki or self.options.default_wiki)
            if site is None:
                logger.error(f"Unknown wiki: {wiki}")
                return result
            try:
                source = site.fetch_page(page, self.spider)
            except WikiError as e:
                logger.error(str(e))
                source = None
            if source is None or not source.successful:
                result.failure = FailureCode.PAGENOTFOUND
                return result
            result.old = source.wikitext
            result.source = SourceKind.WIKI
            result.api = site.api
            result.indexphp = site.indexphp
            result.actual_name = source.actual_name
            result.edit_timestamp = generate_wiki_timestamp(
                parse_wiki_timestamp(source.timestamp)
            )
        else:
            result.failure = FailureCode.NOSOURCE
            return result

        outcome = self.fix(result.old)
        result.log = outcome.log
        result.new = outcome.text
        if not self.options.suppress_bare_url_tag_cleanup:
            result.new = remove_bare_url_tags(result.new)

        result.summary = self.options.summary.replace(
            "%numfixed%", str(len(outcome.log.fixed))
        ).replace("%numskipped%", str(len(outcome.log.skipped)))
        result.timestamp = generate_wiki_timestamp()
        result.status = ResultStatus.SUCCESS
        return result

    @staticmethod
    def get_skipped_reason(reason: int) -> str:
        return get_skipped_reason(reason)
