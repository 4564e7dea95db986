"""Hook admission: ref, path and condition gates applied in order."""

import logging

from tollgate.models import AdmissionEvent, AdmissionResult, HookFilter
from tollgate.runtime.conditions import check_conditions
from tollgate.runtime.hooks import is_valid_hook_path, validate_ref

logger = logging.getLogger(__name__)


def admit(hook_filter: HookFilter, event: AdmissionEvent) -> AdmissionResult:
    """Decide whether an event may trigger a hook.

    Gates run in order (ref, path, conditions) and stop at the first
    refusal. Condition errors propagate to the caller.
    """
    if not validate_ref(hook_filter, event.ref):
        logger.debug(f"Ref {event.ref!r} refused by hook filter")
        return AdmissionResult(admitted=False, reason="ref")

    if not is_valid_hook_path(hook_filter.path_filter, event.paths):
        logger.debug(f"No changed path matches {hook_filter.path_filter}")
        return AdmissionResult(admitted=False, reason="path")

    if not check_conditions(hook_filter.conditions, event.parameters):
        return AdmissionResult(admitted=False, reason="conditions")

    return AdmissionResult(admitted=True)
