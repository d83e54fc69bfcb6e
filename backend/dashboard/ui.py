"""Bar chart page for the monthly price-range histogram."""
import html
import json
from typing import Any, Dict, List, Optional
from fastapi.responses import HTMLResponse
from dashboard.models.aggregates import PriceRangeCount
from dashboard.utils.months import MONTH_NAMES

BAR_COLOR = "#5AC9E8"
FETCH_ERROR_MESSAGE = "Failed to fetch chart data. Please try again later."


def bar_chart_data(histogram: List[PriceRangeCount]) -> Dict[str, Any]:
    """Map a histogram response into a Chart.js bar dataset."""
    return {
        "labels": [bucket.price_range for bucket in histogram],
        "datasets": [
            {
                "label": "Frequency",
                "data": [bucket.count for bucket in histogram],
                "backgroundColor": BAR_COLOR,
                "borderColor": BAR_COLOR,
                "borderWidth": 1,
            }
        ],
    }


def chart_options(y_max: int) -> Dict[str, Any]:
    """Chart.js options: no legend, y-axis from zero to a fixed maximum."""
    return {
        "responsive": True,
        "plugins": {"legend": {"display": False}},
        "scales": {"y": {"beginAtZero": True, "max": y_max}},
    }


def _script_json(value: Any) -> str:
    # Safe to inline inside <script>
    return json.dumps(value).replace("<", "\\u003c")


def render_dashboard(
    month: str,
    chart_data: Optional[Dict[str, Any]],
    y_max: int,
    error: Optional[str] = None,
    barchart_url: str = "/api/transactions/barchart",
) -> HTMLResponse:
    """
    Render the bar chart page.

    The page starts with ``chart_data`` already mapped for ``month`` and
    refetches the histogram from ``barchart_url`` whenever another month is
    selected.
    """
    options = "\n".join(
        f'        <option value="{name}"{" selected" if name == month else ""}>{name}</option>'
        for name in MONTH_NAMES
    )

    page = f"""\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Bar Chart Stats - {html.escape(month)}</title>
  <script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
  <style>
    * {{ margin: 0; padding: 0; box-sizing: border-box; }}
    body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
           background: #f3f4f6; min-height: 100vh; display: flex;
           align-items: center; justify-content: center; }}
    .card {{ background: #fff; padding: 1.5rem; border-radius: 8px;
             box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1); width: 100%; max-width: 48rem; }}
    h1 {{ font-size: 1.5rem; font-weight: bold; margin-bottom: 1rem; }}
    select {{ border: 1px solid #d1d5db; padding: 0.5rem; border-radius: 6px; margin-bottom: 1.5rem; }}
    .error {{ color: #ef4444; }}
    [hidden] {{ display: none; }}
  </style>
</head>
<body>
  <div class="card">
    <h1>Bar Chart Stats</h1>
    <select id="month">
{options}
    </select>
    <p id="loading" hidden>Loading...</p>
    <p id="error" class="error"{"" if error else " hidden"}>{html.escape(error or "")}</p>
    <canvas id="chart"></canvas>
  </div>
  <script>
    const BARCHART_URL = {_script_json(barchart_url)};
    const FETCH_ERROR = {_script_json(FETCH_ERROR_MESSAGE)};
    const BAR_COLOR = {_script_json(BAR_COLOR)};
    const options = {_script_json(chart_options(y_max))};
    const initialData = {_script_json(chart_data)};

    const loadingEl = document.getElementById('loading');
    const errorEl = document.getElementById('error');
    let chart = null;

    function render(data) {{
      if (chart) {{ chart.destroy(); chart = null; }}
      if (data) {{
        chart = new Chart(document.getElementById('chart'), {{ type: 'bar', data: data, options: options }});
      }}
    }}

    function toChartData(histogram) {{
      return {{
        labels: histogram.map((bucket) => bucket.priceRange),
        datasets: [{{
          label: 'Frequency',
          data: histogram.map((bucket) => bucket.count),
          backgroundColor: BAR_COLOR,
          borderColor: BAR_COLOR,
          borderWidth: 1,
        }}],
      }};
    }}

    async function fetchChartData(month) {{
      loadingEl.hidden = false;
      errorEl.hidden = true;
      try {{
        const response = await fetch(`${{BARCHART_URL}}?month=${{encodeURIComponent(month)}}`);
        if (!response.ok) {{
          throw new Error(`Error: ${{response.status}}`);
        }}
        render(toChartData(await response.json()));
      }} catch (err) {{
        render(null);
        errorEl.textContent = FETCH_ERROR;
        errorEl.hidden = false;
      }} finally {{
        loadingEl.hidden = true;
      }}
    }}

    document.getElementById('month').addEventListener('change', (event) => {{
      history.replaceState(null, '', `?month=${{encodeURIComponent(event.target.value)}}`);
      fetchChartData(event.target.value);
    }});

    render(initialData);
  </script>
</body>
</html>"""
    return HTMLResponse(content=page)
