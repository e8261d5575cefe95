"""Daily sales report generator for POS product and payment exports."""

from .config import NippoConfig, load_config
from .errors import EmptyStatsInputError, MissingInputError, ReportError
from .models import (
    CoursePeopleEntry,
    OtherPayment,
    RamenCount,
    ReportState,
    UnassignedItem,
)
from .payments import PaymentClassifier, PaymentSummary
from .products import ProductClassifier, ProductTally, guess_variant
from .reassign import assign_all_to_default, reassign, reassign_to_course, shift_date
from .render import render_report
from .session import ReportSession, classify_report, infer_report_date

__all__ = [
    "NippoConfig",
    "load_config",
    "ReportError",
    "MissingInputError",
    "EmptyStatsInputError",
    "ReportState",
    "RamenCount",
    "OtherPayment",
    "CoursePeopleEntry",
    "UnassignedItem",
    "PaymentClassifier",
    "PaymentSummary",
    "ProductClassifier",
    "ProductTally",
    "guess_variant",
    "classify_report",
    "infer_report_date",
    "ReportSession",
    "render_report",
    "reassign",
    "reassign_to_course",
    "assign_all_to_default",
    "shift_date",
]
