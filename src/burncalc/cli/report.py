"""
CLI command rendering an error budget and burn-rate alert report.

Commands:
    burncalc report                                  - Default SLO and alerts
    burncalc report --slo 99.95 --window-days 28     - Override session inputs
    burncalc report --set p1.longWindowUnit=days     - Edit an alert field
    burncalc report --output json                    - Machine-readable output
"""

from __future__ import annotations

import json
from typing import Any

from burncalc.cli.ux import console, header, print_key_value, print_table, warning
from burncalc.config.loader import ConfigLoader, get_config_path
from burncalc.core.errors import ExitCode, main_with_error_handling
from burncalc.logging import bind_context
from burncalc.slos.alerts import AlertSet
from burncalc.slos.burn_rate import calculate_time_to_exhaustion
from burncalc.slos.formatting import format_duration, format_number, format_percentage
from burncalc.slos.models import UpdateResult
from burncalc.slos.session import SloSession


def parse_edit(expression: str) -> tuple[str, str, str] | None:
    """Split ``ID.FIELD=VALUE`` into its parts. VALUE may be empty."""
    target, sep, value = expression.partition("=")
    alert_id, dot, field = target.partition(".")
    if not sep or not dot or not alert_id or not field:
        return None
    return alert_id, field, value


def apply_edits(alerts: AlertSet, edits: list[str]) -> list[dict[str, str]]:
    """Apply ``--set`` edits in order; return the ones that were rejected."""
    rejected = []
    for expression in edits:
        parsed = parse_edit(expression)
        if parsed is None:
            rejected.append({"edit": expression, "reason": "expected ID.FIELD=VALUE"})
            continue

        alert_id, field, value = parsed
        result = alerts.update_alert(alert_id, field, value)
        if not result:
            rejected.append({"edit": expression, "reason": result.reason or "rejected"})
    return rejected


def apply_session_overrides(
    session: SloSession,
    slo: float | None = None,
    window_days: int | None = None,
    total_events: str | None = None,
    sli_description: str | None = None,
) -> list[dict[str, str]]:
    """Apply command-line session inputs; return the ones that were rejected."""
    attempts: list[tuple[str, UpdateResult]] = []
    if slo is not None:
        attempts.append((f"slo={slo}", session.set_slo(slo)))
    if window_days is not None:
        attempts.append((f"window-days={window_days}", session.set_window_days(window_days)))
    if total_events is not None:
        attempts.append((f"events={total_events}", session.set_total_events_text(total_events)))
    if sli_description is not None:
        attempts.append(("sli", session.set_sli_description(sli_description)))

    return [
        {"edit": edit, "reason": result.reason or "rejected"}
        for edit, result in attempts
        if not result
    ]


def build_report(session: SloSession, alerts: AlertSet) -> dict[str, Any]:
    """Assemble session, error budget and per-alert results as plain data."""
    results = alerts.get_alert_results()
    rows = []
    for alert in alerts.get_alerts():
        result = results[alert.id]
        exhaustion = calculate_time_to_exhaustion(session.window_days, result.burn_rate)
        rows.append(
            {
                **alert.to_dict(),
                "result": result.to_dict(),
                "timeToExhaustionSeconds": exhaustion.total_seconds() if exhaustion else None,
            }
        )

    return {
        "session": session.to_dict(),
        "errorBudget": session.error_budget().to_dict(),
        "composition": [
            {"name": s.name, "value": s.value, "color": s.color} for s in session.composition()
        ],
        "alerts": rows,
    }


def _print_text_report(session: SloSession, alerts: AlertSet) -> None:
    header("Error Budget Overview")
    overview = {
        "SLO Target": f"{format_number(session.slo, 3)}%",
        "Allowed Error Ratio": format_percentage(session.eb_ratio, 4),
        "Allowed Error Events": (
            f"{format_number(session.allowed_failures, 0)} per {session.window_days} days"
        ),
        "Estimated Total Events": session.formatted_total_events,
        "Collection Frequency": f"{session.collection_freq.value} (no effect)",
    }
    if session.sli_description:
        overview = {"SLI": session.sli_description, **overview}
    print_key_value(overview)
    console.print()

    results = alerts.get_alert_results()
    rows = []
    for alert in alerts.get_alerts():
        result = results[alert.id]
        style = alert.type.value
        rows.append(
            [
                f"[{style}]{alert.label}[/{style}]",
                alert.severity_label,
                f"{format_number(alert.long_window_value, 0)}{alert.long_window_unit.abbreviation}",
                str(result.short_window),
                f"{format_number(alert.budget_consumed)}%",
                format_number(result.burn_rate, 1),
                format_duration(calculate_time_to_exhaustion(session.window_days, result.burn_rate)),
                format_number(result.trigger_error_count, 0),
                format_percentage(result.threshold, 2),
            ]
        )

    print_table(
        "Burn Rate Alerts",
        [
            "Alert",
            "Routing",
            "Long Window",
            "Short Window",
            "Budget Consumed",
            "Burn Rate",
            "Time to Exhaustion",
            "Est. Trigger Errors",
            "Error Rate Threshold",
        ],
        rows,
    )


@main_with_error_handling()
def report_command(
    config_path: str | None = None,
    slo: float | None = None,
    window_days: int | None = None,
    total_events: str | None = None,
    sli_description: str | None = None,
    edits: list[str] | None = None,
    output_format: str = "text",
) -> int:
    """Render the error budget overview and alert table."""
    path = get_config_path(config_path) if config_path else None
    session, alerts = ConfigLoader(path).load()

    rejected = apply_session_overrides(session, slo, window_days, total_events, sli_description)
    rejected += apply_edits(alerts, edits or [])
    log = bind_context(command="report")
    log.debug("report_inputs", rejected=len(rejected), alerts=len(alerts))

    if output_format == "json":
        report = build_report(session, alerts)
        report["rejected"] = rejected
        print(json.dumps(report, indent=2))
    else:
        for item in rejected:
            warning(f"Ignored {item['edit']}: {item['reason']}")
        _print_text_report(session, alerts)

    return ExitCode.WARNING if rejected else ExitCode.SUCCESS
