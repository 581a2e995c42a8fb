import json
from collections import Counter
from datetime import datetime
from html import escape
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
LOG_PATH = ROOT / "logs" / "events.jsonl"
REPORT_PATH = ROOT / "reports" / "api_report.html"


def load_events(path: Path = LOG_PATH):
    if not path.exists():
        return []
    events = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            events.append(json.loads(line))
    return events


def fmt_ts(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


def rows(pairs) -> str:
    return "".join(f"<tr><td>{escape(str(k))}</td><td>{v}</td></tr>" for k, v in pairs)


def render_report(events) -> str:
    by_route = Counter(e.get("route", "UNKNOWN") for e in events)
    errors = [e for e in events if e.get("status") == "error"]
    by_error_route = Counter(e.get("route", "UNKNOWN") for e in errors)

    recent = sorted(events, key=lambda e: e.get("timestamp", 0), reverse=True)[:20]

    return f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>API Report</title>
  <style>
    body {{ font-family: -apple-system, system-ui, Arial; margin: 24px; }}
    .card {{ border: 1px solid #ddd; border-radius: 12px; padding: 16px; margin-bottom: 16px; }}
    table {{ width: 100%; border-collapse: collapse; }}
    th, td {{ border-bottom: 1px solid #eee; padding: 10px; text-align: left; font-size: 14px; }}
    th {{ background: #fafafa; }}
    .muted {{ color: #666; }}
  </style>
</head>
<body>
  <h1>API Call Report</h1>
  <p class="muted">Generated: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}</p>

  <div class="card">
    <h2>Summary</h2>
    <p>Calls: <b>{len(events)}</b> &middot; Errors: <b>{len(errors)}</b></p>
  </div>

  <div class="card">
    <h2>Calls by Route</h2>
    <table>
      <tr><th>Route</th><th>Count</th></tr>
      {rows(by_route.most_common())}
    </table>
  </div>

  <div class="card">
    <h2>Errors by Route</h2>
    <table>
      <tr><th>Route</th><th>Count</th></tr>
      {rows(by_error_route.most_common())}
    </table>
  </div>

  <div class="card">
    <h2>Recent Calls (last 20)</h2>
    <table>
      <tr><th>Time</th><th>Method</th><th>Route</th><th>Status</th></tr>
      {''.join(
        "<tr>"
        f"<td>{fmt_ts(e.get('timestamp', 0))}</td>"
        f"<td>{escape(e.get('method', ''))}</td>"
        f"<td>{escape(e.get('route', ''))}</td>"
        f"<td>{escape(e.get('status', ''))}</td>"
        "</tr>"
        for e in recent
      )}
    </table>
  </div>
</body>
</html>"""


def main():
    html = render_report(load_events())
    REPORT_PATH.parent.mkdir(parents=True, exist_ok=True)
    REPORT_PATH.write_text(html, encoding="utf-8")
    print(f"[OK] Wrote report to: {REPORT_PATH}")


if __name__ == "__main__":
    main()
