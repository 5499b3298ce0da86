"""
Rendu HTML / HTML rendering.
Pages serveur en f-strings, toutes les valeurs utilisateur passent par html.escape.
Server pages as f-strings, every user value goes through html.escape.
"""

from html import escape

from app.config import settings
from app.models.schedule import Schedule
from app.schemas.auth import SessionUser
from app.services.schedule_service import ScheduleView

AVAILABILITY_LABELS = {0: "?", 1: "Absent", 2: "Present"}

_STYLE = """
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
               margin: 0; padding: 24px; color: #222; }
        header { display: flex; justify-content: space-between; margin-bottom: 24px; }
        table { border-collapse: collapse; }
        th, td { border: 1px solid #ccc; padding: 6px 12px; text-align: center; }
        .memo { white-space: normal; color: #555; margin-bottom: 16px; }
        .availability-toggle { min-width: 80px; cursor: pointer; }
"""


class PageRenderer:
    """Gabarits des pages / Page templates."""

    @staticmethod
    def layout(title: str, body: str, user: SessionUser | None = None) -> str:
        if user is not None:
            account = f'{escape(user.username)} <a href="/logout">Logout</a>'
        else:
            account = '<a href="/login">Login</a>'
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)} - {escape(settings.APP_NAME)}</title>
    <style>{_STYLE}</style>
</head>
<body>
    <header><a href="/">{escape(settings.APP_NAME)}</a><span>{account}</span></header>
{body}
</body>
</html>"""

    @staticmethod
    def index(user: SessionUser | None, schedules: list[Schedule]) -> str:
        if user is None:
            body = '<p><a href="/login">Login</a> to create a schedule.</p>'
            return PageRenderer.layout("Home", body)

        rows = "\n".join(
            f'<tr><td><a href="/schedules/{escape(s.schedule_id)}">{escape(s.schedule_name)}</a></td>'
            f"<td>{s.created_at:%Y-%m-%d %H:%M}</td></tr>"
            for s in schedules
        )
        body = f"""    <p><a href="/schedules/new">New schedule</a></p>
    <table>
        <tr><th>Schedule</th><th>Created</th></tr>
        {rows}
    </table>"""
        return PageRenderer.layout("Home", body, user)

    @staticmethod
    def login(user: SessionUser | None) -> str:
        body = '    <p><a href="/auth/github">Login with GitHub</a></p>'
        if user is not None:
            body += f"\n    <p>Logged in as {escape(user.username)}</p>"
        return PageRenderer.layout("Login", body, user)

    @staticmethod
    def new_schedule(user: SessionUser, error: str | None = None) -> str:
        error_html = f'<p class="error">{escape(error)}</p>' if error else ""
        body = f"""    {error_html}
    <form method="post" action="/schedules">
        <p><label>Name<br><input type="text" name="scheduleName" maxlength="255"></label></p>
        <p><label>Memo<br><textarea name="memo" rows="4" cols="40"></textarea></label></p>
        <p><label>Candidates (one per line)<br><textarea name="candidates" rows="6" cols="40"></textarea></label></p>
        <button type="submit">Create</button>
    </form>"""
        return PageRenderer.layout("New schedule", body, user)

    @staticmethod
    def schedule(view: ScheduleView, user: SessionUser) -> str:
        schedule = view.schedule
        memo_html = "<br>".join(escape(line) for line in schedule.memo.replace("\r\n", "\n").split("\n"))
        header_cells = "".join(f"<th>{escape(p.username)}</th>" for p in view.participants)

        rows = []
        for candidate in view.candidates:
            cells = []
            for participant in view.participants:
                value = view.availability_of(candidate.candidate_id, participant.user_id)
                label = escape(AVAILABILITY_LABELS.get(value, str(value)))
                if participant.user_id == user.user_id:
                    url = (f"/schedules/{escape(schedule.schedule_id)}/users/{user.user_id}"
                           f"/candidates/{candidate.candidate_id}")
                    cells.append(
                        f'<td><button class="availability-toggle" data-url="{url}" '
                        f'data-availability="{value}">{label}</button></td>'
                    )
                else:
                    cells.append(f"<td>{label}</td>")
            rows.append(f"<tr><th>{escape(candidate.candidate_name)}</th>{''.join(cells)}</tr>")

        comment_cells = "".join(
            f"<td>{escape(view.comment_of(p.user_id))}</td>" for p in view.participants
        )
        comment_url = f"/schedules/{escape(schedule.schedule_id)}/users/{user.user_id}/comments"
        creator = escape(view.creator.username)

        body = f"""    <h1>{escape(schedule.schedule_name)}</h1>
    <p class="memo">{memo_html}</p>
    <p>Created by {creator}</p>
    <table>
        <tr><th>Candidate</th>{header_cells}</tr>
        {''.join(rows)}
        <tr><th>Comment</th>{comment_cells}</tr>
    </table>
    <p><input id="comment-input" type="text" maxlength="255" value="{escape(view.comment_of(user.user_id))}">
       <button id="comment-save" data-url="{comment_url}">Save comment</button></p>
    <script>
        const labels = {{0: "?", 1: "Absent", 2: "Present"}};
        document.querySelectorAll(".availability-toggle").forEach((button) => {{
            button.addEventListener("click", async () => {{
                const next = (parseInt(button.dataset.availability, 10) + 1) % 3;
                const res = await fetch(button.dataset.url, {{
                    method: "POST",
                    headers: {{"Content-Type": "application/json"}},
                    body: JSON.stringify({{availability: next}}),
                }});
                const data = await res.json();
                button.dataset.availability = data.availability;
                button.textContent = labels[data.availability];
            }});
        }});
        document.getElementById("comment-save").addEventListener("click", async (event) => {{
            await fetch(event.target.dataset.url, {{
                method: "POST",
                headers: {{"Content-Type": "application/json"}},
                body: JSON.stringify({{comment: document.getElementById("comment-input").value}}),
            }});
            location.reload();
        }});
    </script>"""
        return PageRenderer.layout(schedule.schedule_name, body, user)
