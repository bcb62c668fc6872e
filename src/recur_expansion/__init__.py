"""recur-expansion: Resumable merge of recurrence rules, extra dates and exclusions."""

from recur_expansion.dates import OrderedDateList
from recur_expansion.definition import (
    EXDATE,
    RDATE,
    RECURRENCE_ID,
    RRULE,
    EventDefinition,
    RecurrenceSource,
)
from recur_expansion.expansion import DEFAULT_MAX_TRIES, RecurExpansion
from recur_expansion.generators import DateutilRuleGenerator, RuleGenerator
from recur_expansion.instants import dump_instant, load_instant
from recur_expansion.types import ExpansionSnapshot, UnsatisfiableExpansionError
from recur_expansion.window import occurrences_between, take

__all__ = [
    "DEFAULT_MAX_TRIES",
    "DateutilRuleGenerator",
    "EXDATE",
    "EventDefinition",
    "ExpansionSnapshot",
    "OrderedDateList",
    "RDATE",
    "RECURRENCE_ID",
    "RRULE",
    "RecurExpansion",
    "RecurrenceSource",
    "RuleGenerator",
    "UnsatisfiableExpansionError",
    "dump_instant",
    "load_instant",
    "occurrences_between",
    "take",
]
