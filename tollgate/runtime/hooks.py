"""Hook path and ref admission.

Repository hooks can restrict the events they fire on with path filters
(regular expressions over changed files) and branch/tag filters (glob
patterns over the ref). Malformed patterns are logged and never raised.
"""

import logging
import re
from typing import List, Sequence

from tollgate.constants import GIT_REF_BRANCH_PREFIX, GIT_REF_TAG_PREFIX
from tollgate.models import HookFilter
from tollgate.primitives.errors import GlobError
from tollgate.primitives.glob import Glob

logger = logging.getLogger(__name__)


def is_valid_hook_path(configured_paths: Sequence[str], paths: Sequence[str]) -> bool:
    """Check whether any changed path matches any configured path pattern.

    Args:
        configured_paths: Regex patterns from the hook. Empty means no
            restriction.
        paths: Files changed by the event.

    Returns:
        True when unrestricted or when some path matches some pattern.
    """
    if not configured_paths:
        return True
    if not paths:
        return False

    patterns: List[re.Pattern] = []
    for raw in configured_paths:
        try:
            patterns.append(re.compile(raw))
        except re.error as e:
            logger.warning(f"Skipping invalid hook path pattern {raw!r}: {e}")

    return any(p.search(path) for p in patterns for path in paths)


def is_valid_hook_refs(configured_refs: Sequence[str], current_ref: str) -> bool:
    """Check a ref against glob patterns joined into one alternation.

    Args:
        configured_refs: Glob patterns from the hook. Empty means no
            restriction.
        current_ref: Ref of the event.

    Returns:
        True when unrestricted or matched. A pattern that does not
        compile is logged and counts as no match.
    """
    if not configured_refs:
        return True

    pattern = " ".join(configured_refs)
    try:
        g = Glob(pattern)
    except GlobError as e:
        logger.warning(f"Unable to compile hook ref pattern {pattern!r}: {e}")
        return False
    return g.match(current_ref)


def validate_ref(hook_filter: HookFilter, ref: str) -> bool:
    """Route a full git ref to the hook's branch or tag filter.

    Branch refs (refs/heads/...) are checked against branch_filter and any
    other ref against tag_filter, with the prefix stripped. A hook without
    any filter accepts every ref.
    """
    branches = hook_filter.branch_filter
    tags = hook_filter.tag_filter

    if not branches and not tags:
        return True

    if ref.startswith(GIT_REF_BRANCH_PREFIX):
        if branches or not tags:
            return is_valid_hook_refs(branches, ref.removeprefix(GIT_REF_BRANCH_PREFIX))
        return False

    if tags or not branches:
        return is_valid_hook_refs(tags, ref.removeprefix(GIT_REF_TAG_PREFIX))
    return False
