"""
Earned-Value & Forecast Engine.

Pure, synchronous functions over immutable inputs:
- aggregation: per-code event totals
- progress: simple ratio or claiming-schema percent complete
- earned_value: earned hours, performance factor, status
- forecast: ECAC, reverse rate, final production rate
- rollup: weighted work-package components and assembly EAC
- materials: proportional inventory drawdown
- staleness: claiming progress not re-affirmed
- analysis: reviewer and closeout rows built from the above
"""

from .policy import Policy, DEFAULT_POLICY
from .aggregation import EventTotals, aggregate_events, events_for_code, latest_event
from .progress import (
    calc_simple_percent_complete,
    calc_claiming_percent_complete,
    calc_percent_complete,
)
from .earned_value import (
    PerformanceStatus,
    calc_earned_hours,
    calc_performance_factor,
    classify_status,
    format_performance_factor,
)
from .forecast import (
    ECACResult,
    ReverseRateResult,
    calc_inline_ecac,
    calc_reverse_rate,
    calc_final_production_rate,
)
from .rollup import (
    VarianceFlag,
    ComponentAnalysis,
    ComponentEAC,
    ComponentProjection,
    AssemblyEAC,
    calc_weight,
    component_weights,
    calc_component_earned_hours,
    calc_progress_percent,
    calc_earned_value,
    calc_bid_rate,
    calc_inferred_rate,
    calc_variance_flag,
    calc_variance_percent,
    analyze_components,
    calc_component_eac,
    calc_assembly_eac,
)
from .materials import calc_material_drawdown, apply_drawdown
from .staleness import is_claiming_stale
from .analysis import (
    AssemblyAnalysis,
    ReviewRow,
    ReviewSummary,
    CloseoutRate,
    effective_totals,
    calc_assembly_analysis,
    analyze_snapshot,
    build_review_row,
    build_review_rows,
    summarize_review,
    calc_reverse_for_review,
    calc_closeout_rates,
)
from .narrative import generate_component_narrative, generate_eac_narrative

__all__ = [
    'Policy', 'DEFAULT_POLICY',
    'EventTotals', 'aggregate_events', 'events_for_code', 'latest_event',
    'calc_simple_percent_complete', 'calc_claiming_percent_complete', 'calc_percent_complete',
    'PerformanceStatus', 'calc_earned_hours', 'calc_performance_factor',
    'classify_status', 'format_performance_factor',
    'ECACResult', 'ReverseRateResult', 'calc_inline_ecac', 'calc_reverse_rate',
    'calc_final_production_rate',
    'VarianceFlag', 'ComponentAnalysis', 'ComponentEAC', 'ComponentProjection', 'AssemblyEAC',
    'calc_weight', 'component_weights', 'calc_component_earned_hours',
    'calc_progress_percent', 'calc_earned_value', 'calc_bid_rate', 'calc_inferred_rate',
    'calc_variance_flag', 'calc_variance_percent', 'analyze_components',
    'calc_component_eac', 'calc_assembly_eac',
    'calc_material_drawdown', 'apply_drawdown',
    'is_claiming_stale',
    'AssemblyAnalysis', 'ReviewRow', 'ReviewSummary', 'CloseoutRate',
    'effective_totals', 'calc_assembly_analysis', 'analyze_snapshot', 'build_review_row', 'build_review_rows',
    'summarize_review', 'calc_reverse_for_review', 'calc_closeout_rates',
    'generate_component_narrative', 'generate_eac_narrative',
]
