"""
app/views/pages.py

Purpose: HTML pages

- Registration form (GET /)
- Registered users table (GET /list)
"""

from html import escape
from typing import Iterable
from urllib.parse import quote

from app.models.user import UserRecord

_STYLE = """
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f7fafc;
            color: #2d3748;
            margin: 0;
            padding: 40px 20px;
        }

        .container {
            background: white;
            border-radius: 12px;
            box-shadow: 0 10px 30px rgba(0, 0, 0, 0.1);
            padding: 30px;
            max-width: 900px;
            margin: 0 auto;
        }

        label {
            display: block;
            font-weight: 600;
            margin: 16px 0 6px;
        }

        input[type=text], input[type=email] {
            width: 100%;
            padding: 8px;
            box-sizing: border-box;
        }

        button {
            margin-top: 24px;
            background: #667eea;
            color: white;
            border: none;
            padding: 10px 28px;
            border-radius: 20px;
            cursor: pointer;
        }

        table {
            width: 100%;
            border-collapse: collapse;
        }

        th, td {
            border-bottom: 1px solid #e2e8f0;
            padding: 10px;
            text-align: left;
            vertical-align: top;
        }

        img.thumb {
            max-width: 80px;
            max-height: 80px;
        }
"""


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <style>{_STYLE}</style>
</head>
<body>
    <div class="container">
{body}
    </div>
</body>
</html>
"""


def download_url(stored_name: str) -> str:
    return f"/download/{quote(stored_name)}"


def render_registration_form(max_attachments: int = 10) -> str:
    """Registration form posting multipart data to /register."""
    body = f"""
        <h1>Register</h1>
        <form action="/register" method="post" enctype="multipart/form-data">
            <label for="name">Name</label>
            <input type="text" id="name" name="name" required>

            <label for="email">Email</label>
            <input type="email" id="email" name="email" required>

            <label for="profilePic">Profile picture</label>
            <input type="file" id="profilePic" name="profilePic" accept="image/*" required>

            <label for="uploadedFiles">Additional files (up to {max_attachments})</label>
            <input type="file" id="uploadedFiles" name="uploadedFiles" accept="image/*,application/pdf" multiple>

            <button type="submit">Register</button>
        </form>
        <p><a href="/list">View registered users</a></p>
"""
    return _page("Register", body)


def _render_row(user: UserRecord) -> str:
    files = "".join(
        f'<li><a href="{escape(download_url(name))}">{escape(name)}</a></li>'
        for name in user.uploaded_files
    )
    return f"""
            <tr>
                <td>{escape(user.name)}</td>
                <td>{escape(user.email)}</td>
                <td>
                    <img class="thumb" src="{escape(download_url(user.profile_pic))}" alt="{escape(user.name)}">
                    <br><a href="{escape(download_url(user.profile_pic))}">{escape(user.profile_pic)}</a>
                </td>
                <td><ul>{files}</ul></td>
            </tr>"""


def render_user_list(users: Iterable[UserRecord]) -> str:
    """Table of every registered user with download links."""
    rows = "".join(_render_row(user) for user in users)
    body = f"""
        <h1>Registered users</h1>
        <table>
            <thead>
                <tr><th>Name</th><th>Email</th><th>Profile picture</th><th>Files</th></tr>
            </thead>
            <tbody>{rows}
            </tbody>
        </table>
        <p><a href="/">Register another user</a></p>
"""
    return _page("Registered users", body)
