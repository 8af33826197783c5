"""Profile merger — folds per-document PartialProfiles into one CombinedProfile.

Precedence policy: documents are applied in submission order and, within
each field group, every populated field of a later document overwrites the
same field from earlier ones.  Fields a later document leaves empty keep
their earlier values, so a group is merged field-by-field rather than
replaced wholesale.  There is no voting; the last populated value wins.
"""

import logging
from dataclasses import fields

from app.config import TRACE_ENABLED
from app.pipeline.models import PROFILE_GROUPS, CombinedProfile, PartialProfile

logger = logging.getLogger(__name__)


def _trace(msg: str):
    """Emit a trace-level debug message when LENDING_TRACE is enabled."""
    if TRACE_ENABLED:
        logger.debug(f"[TRACE] {msg}")


def _source_label(profile: PartialProfile, index: int) -> str:
    return profile.file_name or f"document[{index}]"


def merge_profiles(profiles: list[PartialProfile]) -> CombinedProfile:
    """Merge an ordered sequence of PartialProfiles.

    The input is neither reordered nor deduplicated.  An empty profile
    contributes its document type to ``document_types`` but no values.
    """
    combined = CombinedProfile()

    for index, profile in enumerate(profiles):
        source = _source_label(profile, index)
        combined.document_types.append(profile.document_type)
        combined.risk_flags.extend(profile.risk_flags)

        for group_name in PROFILE_GROUPS:
            incoming = getattr(profile, group_name)
            target = getattr(combined, group_name)
            for f in fields(incoming):
                value = getattr(incoming, f.name)
                if value is None:
                    continue
                previous = getattr(target, f.name)
                if previous is not None and previous != value:
                    _trace(
                        f"MERGE {group_name}.{f.name}: {previous!r} → {value!r} "
                        f"(from {source})"
                    )
                setattr(target, f.name, value)
                combined.field_sources[f"{group_name}.{f.name}"] = source

    logger.info(
        f"Merger: {len(profiles)} document(s) → groups {combined.populated_groups()}"
    )
    return combined
