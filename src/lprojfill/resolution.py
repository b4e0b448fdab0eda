"""Resolution pipeline: fill one phrase for a target locale.

Resolution steps (first success wins, no blending):

1. Base identification - inversed lookup of the phrase in the base locale's
   tables. The hit's key column is the canonical id. No hit raises
   NotFoundError and nothing else runs.
2. Local target lookup - canonical lookup of the id in the target locale's
   tables. A hit is returned without calling any collaborator.
3. Remote corpus - code search for target-locale tables mentioning the
   phrase; candidates are fetched and parsed in order until one contains
   the id. Any collaborator failure here advances to step 4.
4. Machine translation - the phrase is translated; the new entry reuses the
   base entry's key text and comment. Failure raises UnresolvedError.

Entries produced by steps 3 and 4 are merged into an in-memory Localization
per target locale (:meth:`Resolver.merged`). Nothing is written to disk.

Before the first phrase of a target locale without an lproj directory is
resolved, the base locale's directory is mirrored into place through the
DirectoryCopier.

Concurrency:
    Phrases are resolved one at a time; steps never overlap. Collaborator
    calls are awaited under the caller's :class:`Deadline`. The Resolver
    holds no locks: concurrent ``resolve()`` calls writing the same target
    locale must be serialized by the caller.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass

from lprojfill.collaborators.protocols import (
    CodeSearch,
    DirectoryCopier,
    MachineTranslator,
    ResourceReference,
)
from lprojfill.constants import DEFAULT_BASE_LOCALE
from lprojfill.diagnostics import (
    CollaboratorError,
    NotFoundError,
    ParseError,
    ProjectError,
    UnresolvedError,
)
from lprojfill.enums import ResolutionOrigin
from lprojfill.project import Project
from lprojfill.strings.model import Localization, Translation, normalize_key
from lprojfill.strings.parser import parse, resolve_path_locale
from lprojfill.types import LocaleCode, Phrase, TranslationKey

__all__ = ["BatchResult", "Deadline", "Resolution", "Resolver"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Deadline:
    """Time budget and cancellation flag threaded through resolution.

    Collaborator calls run under ``asyncio.timeout(deadline.remaining())``.
    An expired or cancelled deadline makes every remaining collaborator step
    a soft failure; purely local steps still run.

    Example:
        >>> deadline = Deadline.after(30.0)
        >>> deadline.expired
        False
        >>> deadline.cancel()
        >>> deadline.expired
        True
    """

    expires_at: float | None = None
    cancelled: bool = False

    @classmethod
    def after(cls, seconds: float) -> Deadline:
        """Create a deadline ``seconds`` from now."""
        return cls(expires_at=time.monotonic() + seconds)

    @classmethod
    def never(cls) -> Deadline:
        """Create a deadline that only expires when cancelled."""
        return cls()

    def cancel(self) -> None:
        """Cancel; subsequent collaborator steps are skipped."""
        self.cancelled = True

    @property
    def expired(self) -> bool:
        """True when cancelled or past the expiry time."""
        if self.cancelled:
            return True
        return self.expires_at is not None and time.monotonic() >= self.expires_at

    def remaining(self) -> float | None:
        """Seconds left, 0.0 when expired, None when unbounded."""
        if self.cancelled:
            return 0.0
        if self.expires_at is None:
            return None
        return max(0.0, self.expires_at - time.monotonic())


@dataclass(frozen=True, slots=True)
class Resolution:
    """Successful resolution of one phrase.

    Attributes:
        phrase: Phrase as requested
        key: Canonical id shared across locales
        value: Translated text
        origin: Step that produced the value
    """

    phrase: Phrase
    key: TranslationKey
    value: str
    origin: ResolutionOrigin


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Outcome of one phrase in :meth:`Resolver.resolve_many`.

    Exactly one of ``resolution`` and ``error`` is set.
    """

    phrase: Phrase
    resolution: Resolution | None = None
    error: NotFoundError | UnresolvedError | None = None

    @property
    def ok(self) -> bool:
        """True when the phrase was resolved."""
        return self.resolution is not None


class Resolver:
    """Resolve phrases from a base locale into target locales.

    Args:
        project: Project whose lproj directories are consulted
        base_locale: Locale establishing canonical ids (default: 'en')
        search: Remote corpus collaborator; step 3 is skipped when None
        translator: Machine-translation collaborator; step 4 is skipped when None
        copier: Directory-copy collaborator used to seed missing target
            directories; seeding is skipped when None

    Example:
        >>> resolver = Resolver(Project("MyApp"), translator=translator)
        >>> resolution = asyncio.run(resolver.resolve("Activity", "de"))
        >>> resolution.value, resolution.origin
        ('Aktivität', <ResolutionOrigin.LOCAL: 'local'>)
    """

    __slots__ = (
        "_base_locale",
        "_copier",
        "_merged",
        "_prepared",
        "_project",
        "_search",
        "_seeded",
        "_translator",
    )

    def __init__(
        self,
        project: Project,
        *,
        base_locale: LocaleCode = DEFAULT_BASE_LOCALE,
        search: CodeSearch | None = None,
        translator: MachineTranslator | None = None,
        copier: DirectoryCopier | None = None,
    ) -> None:
        self._project = project
        self._base_locale = base_locale
        self._search = search
        self._translator = translator
        self._copier = copier
        self._merged: dict[LocaleCode, Localization] = {}
        self._prepared: set[LocaleCode] = set()
        self._seeded: set[LocaleCode] = set()

    @property
    def project(self) -> Project:
        """Project being resolved against."""
        return self._project

    @property
    def base_locale(self) -> LocaleCode:
        """Locale establishing canonical ids."""
        return self._base_locale

    def merged(self, target_locale: LocaleCode) -> Localization:
        """Return the in-memory Localization receiving remote and machine results."""
        localization = self._merged.get(target_locale)
        if localization is None:
            localization = Localization(locale=target_locale)
            self._merged[target_locale] = localization
        return localization

    def prepare(self, target_locale: LocaleCode) -> None:
        """Seed ``<target>.lproj`` from the base locale if it does not exist.

        Runs at most once per target locale per Resolver. A failed copy is
        logged and not retried; resolution continues without seeded files.

        Raises:
            ProjectError: If the base locale directory does not exist
        """
        if target_locale in self._prepared:
            return

        base_dir = self._project.locale_dir(self._base_locale)
        if not base_dir.is_dir():
            msg = f"Base locale directory not found: {base_dir}"
            raise ProjectError(msg, path=base_dir)

        self._prepared.add(target_locale)
        if target_locale == self._base_locale or self._project.has_locale(target_locale):
            return

        target_dir = self._project.locale_dir(target_locale)
        if self._copier is None:
            logger.warning("No directory copier configured; %s not created", target_dir)
            return

        try:
            self._copier.copy_tree(base_dir, target_dir)
        except CollaboratorError as e:
            logger.error("Failed to create directory for target locale '%s': %s", target_locale, e)
            return
        self._seeded.add(target_locale)
        logger.info("Seeded %s from %s", target_dir, base_dir)

    def _identify(self, phrase: Phrase) -> Translation:
        """Step 1: find the base entry whose phrase column matches."""
        base = self._project.find_translation(
            self._base_locale, normalize_key(phrase), inversed=True
        )
        if base is None:
            msg = f"'{phrase}' not found in any '{self._base_locale}' string table"
            raise NotFoundError(msg, phrase=phrase, locale=self._base_locale)
        return base

    def _lookup_local(
        self, key: TranslationKey, base: Translation, target_locale: LocaleCode
    ) -> Translation | None:
        """Step 2: look the id up in the target locale's own tables.

        In a directory seeded during this run, an entry still carrying the
        base phrase verbatim is an untranslated copy and does not count; the
        remaining tables are still searched.
        """
        seeded = target_locale in self._seeded
        for localization in self._project.localizations_for_locale(target_locale):
            local = localization.get(key)
            if local is None:
                continue
            if seeded and local.target == base.source:
                logger.debug("'%s' in %s is an untranslated seed copy", key, localization.path)
                continue
            return local
        return None

    async def _fetch_candidate(
        self,
        search: CodeSearch,
        reference: ResourceReference,
        target_locale: LocaleCode,
        deadline: Deadline,
    ) -> Localization | None:
        try:
            async with asyncio.timeout(deadline.remaining()):
                raw = await search.fetch(reference)
        except CollaboratorError as e:
            logger.warning("Skipping %s:%s: %s", reference.repository, reference.path, e)
            return None

        try:
            return parse(
                raw,
                locale=resolve_path_locale(reference.path) or target_locale,
                path=reference.path,
            )
        except ParseError as e:
            logger.warning("Skipping %s:%s: %s", reference.repository, reference.path, e)
            return None

    async def _lookup_remote(
        self,
        phrase: Phrase,
        key: TranslationKey,
        target_locale: LocaleCode,
        deadline: Deadline,
    ) -> Translation | None:
        """Step 3: search the remote corpus; every failure is soft."""
        search = self._search
        if search is None:
            return None
        if deadline.expired:
            logger.info("Deadline expired; skipping remote search for '%s'", phrase)
            return None

        try:
            async with asyncio.timeout(deadline.remaining()):
                references = await search.search(phrase, target_locale)
            for reference in references:
                localization = await self._fetch_candidate(
                    search, reference, target_locale, deadline
                )
                if localization is None:
                    continue
                translation = localization.get(key)
                if translation is not None:
                    logger.debug(
                        "'%s' found in %s:%s", key, reference.repository, reference.path
                    )
                    return translation
        except CollaboratorError as e:
            logger.warning("Remote search for '%s' failed: %s", phrase, e)
        except TimeoutError:
            logger.warning("Remote search for '%s' timed out", phrase)
        return None

    async def _machine_translate(
        self,
        phrase: Phrase,
        base: Translation,
        target_locale: LocaleCode,
        deadline: Deadline,
    ) -> Translation:
        """Step 4: machine-translate; failure makes the phrase unresolved."""
        msg = f"No translation of '{phrase}' into '{target_locale}'"
        if self._translator is None or deadline.expired:
            raise UnresolvedError(msg, phrase=phrase, locale=target_locale)

        try:
            async with asyncio.timeout(deadline.remaining()):
                translated = await self._translator.translate(
                    phrase, self._base_locale, target_locale
                )
        except CollaboratorError as e:
            raise UnresolvedError(f"{msg}: {e}", phrase=phrase, locale=target_locale) from e
        except TimeoutError as e:
            raise UnresolvedError(
                f"{msg}: translation timed out", phrase=phrase, locale=target_locale
            ) from e

        return Translation(source=base.target, target=translated, comment=base.comment)

    async def resolve(
        self,
        phrase: Phrase,
        target_locale: LocaleCode,
        *,
        deadline: Deadline | None = None,
    ) -> Resolution:
        """Resolve ``phrase`` into ``target_locale``.

        Args:
            phrase: Phrase as written in the base locale (case-insensitive)
            target_locale: Locale to translate into
            deadline: Time budget for collaborator calls (default: unbounded)

        Returns:
            Resolution carrying the value and the step that produced it

        Raises:
            NotFoundError: If no base-locale table contains ``phrase``
            UnresolvedError: If every step was exhausted
            ProjectError: If the base locale directory does not exist
        """
        if deadline is None:
            deadline = Deadline.never()

        self.prepare(target_locale)

        base = self._identify(phrase)
        key = normalize_key(base.target)

        local = self._lookup_local(key, base, target_locale)
        if local is not None:
            logger.debug("'%s' resolved locally in %s", phrase, target_locale)
            return Resolution(phrase, key, local.target, ResolutionOrigin.LOCAL)

        translation = await self._lookup_remote(phrase, key, target_locale, deadline)
        origin = ResolutionOrigin.REMOTE
        if translation is None:
            translation = await self._machine_translate(phrase, base, target_locale, deadline)
            origin = ResolutionOrigin.MACHINE

        self.merged(target_locale).merge(key, translation)
        logger.info("'%s' resolved via %s in %s", phrase, origin, target_locale)
        return Resolution(phrase, key, translation.target, origin)

    async def resolve_many(
        self,
        phrases: Iterable[Phrase],
        target_locale: LocaleCode,
        *,
        deadline: Deadline | None = None,
    ) -> list[BatchResult]:
        """Resolve ``phrases`` one after another.

        Per-phrase NotFoundError / UnresolvedError are recorded in the
        corresponding BatchResult and never stop the batch.

        Raises:
            ProjectError: If the base locale directory does not exist
        """
        results: list[BatchResult] = []
        for phrase in phrases:
            try:
                resolution = await self.resolve(phrase, target_locale, deadline=deadline)
            except (NotFoundError, UnresolvedError) as e:
                logger.info("%s", e)
                results.append(BatchResult(phrase, error=e))
            else:
                results.append(BatchResult(phrase, resolution=resolution))
        return results
