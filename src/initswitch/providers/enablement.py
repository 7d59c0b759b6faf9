"""Per-tier enablement rules for upstart jobs.

Each :class:`VersionTier` maps to a :class:`TierStrategy` made of plain
functions. They take the current job file texts and either compute the
enabled state or return the single file edit that enables/disables the
job. Nothing here touches the filesystem.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from initswitch.providers import stanza
from initswitch.providers.locator import JobFileKind
from initswitch.providers.version import VersionTier


@dataclass(frozen=True)
class JobTexts:
    """Current contents of a job's files. A missing override reads as ``""``."""

    primary: str
    override: str = ""


@dataclass(frozen=True)
class JobFileEdit:
    """New content for one job file. Empty override content means delete."""

    kind: JobFileKind
    content: str


def last_stanza_enables(*texts: str) -> bool:
    """Scan ``texts`` in order; the last ``start on`` or ``manual`` stanza wins."""
    enabled = False
    for text in texts:
        for kind, _ in stanza.iter_line_kinds(text):
            if kind is stanza.LineKind.START_ON_OPEN:
                enabled = True
            elif kind is stanza.LineKind.MANUAL:
                enabled = False
    return enabled


# ─── is_enabled ────────────────────────────────────────────────────


def _is_enabled_pre_a(texts: JobTexts) -> bool:
    # No manual stanza before 0.6.7: any start on stanza enables the job.
    return stanza.has_uncommented_start_on(texts.primary)


def _is_enabled_pre_b(texts: JobTexts) -> bool:
    return last_stanza_enables(texts.primary)


def _is_enabled_post_b(texts: JobTexts) -> bool:
    return last_stanza_enables(texts.primary, texts.override)


# ─── enable ────────────────────────────────────────────────────────


def _enable_in_job_file(texts: JobTexts, default_start_on: str) -> JobFileEdit:
    content = stanza.remove_manual_stanzas(texts.primary)
    if not last_stanza_enables(content):
        if stanza.has_commented_start_on(content):
            content = stanza.uncomment_start_on_stanza(content)
        else:
            content = stanza.add_default_start_on_stanza(content, default_start_on)
    return JobFileEdit(JobFileKind.PRIMARY, content)


def _enable_in_override_file(texts: JobTexts, default_start_on: str) -> JobFileEdit:
    override = stanza.remove_manual_stanzas(texts.override)
    if not last_stanza_enables(texts.primary, override):
        if stanza.has_uncommented_start_on(texts.primary):
            override = stanza.append_lines(
                override, stanza.extract_start_on_stanza(texts.primary)
            )
        else:
            override = stanza.add_default_start_on_stanza(override, default_start_on)
    return JobFileEdit(JobFileKind.OVERRIDE, override)


# ─── disable ───────────────────────────────────────────────────────


def _disable_pre_a(texts: JobTexts) -> JobFileEdit:
    return JobFileEdit(JobFileKind.PRIMARY, stanza.comment_start_on_stanza(texts.primary))


def _disable_pre_b(texts: JobTexts) -> JobFileEdit:
    return JobFileEdit(JobFileKind.PRIMARY, stanza.ensure_manual_stanza(texts.primary))


def _disable_post_b(texts: JobTexts) -> JobFileEdit:
    return JobFileEdit(JobFileKind.OVERRIDE, stanza.ensure_manual_stanza(texts.override))


@dataclass(frozen=True)
class TierStrategy:
    """Enablement rules for one upstart tier."""

    tier: VersionTier
    is_enabled: Callable[[JobTexts], bool]
    enable: Callable[[JobTexts, str], JobFileEdit]
    disable: Callable[[JobTexts], JobFileEdit]

    @property
    def reads_override(self) -> bool:
        return self.tier.has_override_files


STRATEGIES: Mapping[VersionTier, TierStrategy] = MappingProxyType({
    VersionTier.PRE_A: TierStrategy(
        tier=VersionTier.PRE_A,
        is_enabled=_is_enabled_pre_a,
        enable=_enable_in_job_file,
        disable=_disable_pre_a,
    ),
    VersionTier.PRE_B: TierStrategy(
        tier=VersionTier.PRE_B,
        is_enabled=_is_enabled_pre_b,
        enable=_enable_in_job_file,
        disable=_disable_pre_b,
    ),
    VersionTier.POST_B: TierStrategy(
        tier=VersionTier.POST_B,
        is_enabled=_is_enabled_post_b,
        enable=_enable_in_override_file,
        disable=_disable_post_b,
    ),
})


def strategy_for(tier: VersionTier) -> TierStrategy:
    return STRATEGIES[tier]
