from rich.console import Console

from rental_reports.reporter import print_refresh_result


def _result(summary):
    return {
        "window_start": "2005-05-30T00:00:00",
        "window_end": "2005-05-30T23:59:59",
        "rows": sum(row["total_rentals"] for row in summary),
        "summary": summary,
        "duration_seconds": 0.01,
    }


def test_prints_one_line_per_bucket():
    console = Console(record=True, width=120)
    print_refresh_result(
        _result(
            [
                {"time_of_day": "Morning", "total_rentals": 2, "total_revenue": "4.98"},
                {"time_of_day": "Evening", "total_rentals": 2, "total_revenue": "0.99"},
            ]
        ),
        console=console,
    )

    text = console.export_text()
    assert "Morning" in text
    assert "4.98" in text
    assert "50.0%" in text


def test_prints_notice_for_empty_window():
    console = Console(record=True, width=120)
    print_refresh_result(_result([]), console=console)

    assert "No rentals" in console.export_text()
