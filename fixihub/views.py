"""
Server-rendered HTML for the counter page, its event log and the timeline.

Event log entries are trusted server markup; note fields come from the
feed and are always escaped.
"""

from html import escape

from .models import LogEntry, Note

TITLE = "FastAPI + fixi.js"

STYLE = """
body { font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Ubuntu, Cantarell, Noto Sans, Helvetica Neue, Arial; line-height: 1.5; margin: 2rem; }
.counter { display: inline-flex; gap: .75rem; align-items: center; padding: 1rem; border: 1px solid #e5e7eb; border-radius: .5rem; }
.counter form { display: inline-flex; gap: .75rem; align-items: center; margin: 0; }
button { padding: .5rem .75rem; border-radius: .375rem; border: 1px solid #d1d5db; background: #111827; color: white; cursor: pointer; }
button:active { transform: translateY(1px); }
.note { border-bottom: 1px solid #e5e7eb; padding: .5rem 0; }
"""


def layout(body: str, title: str = TITLE) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{escape(title)}</title>
    <style>{STYLE}</style>
    <script src="/static/fixi/fixi.js"></script>
    <script src="/static/fixi/extensions.js"></script>
</head>
<body>
{body}
</body>
</html>
"""


def counter(count: int) -> str:
    # fixi enhances the form; without JS it is a plain POST + redirect
    return f"""<div id="counter" class="counter">
    <form fx-action="/counter" fx-method="post" fx-target="#counter" fx-swap="outerHTML" action="/counter" method="post">
        <span>Count: {count}</span>
        <button type="submit">Increment</button>
    </form>
</div>"""


def event_log(entries: list[LogEntry]) -> str:
    items = "\n".join(f"<div>{entry.text}</div>" for entry in entries)
    return f"""<section style="margin-top: 1rem">
    <div ext-fx-sse-autostart="/events" data-target="#event-log" data-swap="beforeend"></div>
    <h2 style="margin: 0 0 .5rem 0">Log</h2>
    <div id="event-log">
{items}
    </div>
</section>"""


def note(item: Note) -> str:
    created = ""
    if item.created_at is not None:
        created = f' <time datetime="{item.created_at.isoformat()}">{item.created_at:%H:%M:%S}</time>'
    return (
        f'<article class="note" id="note-{escape(item.id)}">'
        f"<header><strong>{escape(item.author)}</strong>{created}</header>"
        f"<p>{escape(item.content)}</p>"
        f"</article>"
    )


def timeline(notes: list[Note]) -> str:
    items = "\n".join(note(item) for item in notes)
    return f"""<div id="timeline">
{items}
</div>"""


def timeline_section(notes: list[Note]) -> str:
    return f"""<section style="margin-top: 1rem">
    <div ext-fx-sse-autostart="/timeline/events" data-target="#timeline" data-swap="afterbegin"></div>
    <h2 style="margin: 0 0 .5rem 0">Timeline</h2>
    {timeline(notes)}
</section>"""


def home_page(count: int, entries: list[LogEntry], notes: list[Note]) -> str:
    return layout(
        f"""<h1>Hypermedia Counter</h1>
<p>
    This example uses server-rendered HTML and a <code>fixi.js</code> button
    that POSTs to the server. The server responds with an HTML fragment
    that swaps into <code>#counter</code>, and pushes log lines to every
    open page over Server-Sent Events.
</p>
{counter(count)}
{event_log(entries)}
{timeline_section(notes)}"""
    )
