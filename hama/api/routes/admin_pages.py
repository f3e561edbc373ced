"""
Admin dashboard pages (server-rendered, intentionally bare)
===========================================================

GET /admin/login         -- login form posting to /api/admin/login
GET /admin/reservations  -- reservation table (behind the admin gate)
"""

from __future__ import annotations

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hama.api.dependencies import get_db
from hama.infrastructure.repositories import ReservationRepository

router = APIRouter(prefix="/admin", include_in_schema=False)

_PAGE = """<!doctype html>
<html lang="ko"><head><meta charset="utf-8"><title>{title}</title></head>
<body>{body}</body></html>"""

_LOGIN_FORM = """<h1>HAMA 관리자 로그인</h1>
<form id="login">
  <input name="email" type="email" placeholder="email" required>
  <input name="password" type="password" placeholder="password" required>
  <button type="submit">로그인</button>
</form>
<script>
document.getElementById("login").addEventListener("submit", async (e) => {
  e.preventDefault();
  const f = new FormData(e.target);
  const r = await fetch("/api/admin/login", {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify({email: f.get("email"), password: f.get("password")}),
  });
  if (r.ok) location.href = "/admin/reservations";
  else alert((await r.json()).error);
});
</script>"""

_COLUMNS = ("created_at", "store", "name", "people", "date", "time", "phone", "note")


@router.get("/login", response_class=HTMLResponse)
async def login_page():
    return _PAGE.format(title="Admin login", body=_LOGIN_FORM)


@router.get("/reservations", response_class=HTMLResponse)
async def reservations_page(db: AsyncSession = Depends(get_db)):
    rows = await ReservationRepository(db).list_recent()
    head = "".join(f"<th>{c}</th>" for c in _COLUMNS)
    body_rows = "".join(
        "<tr>"
        + "".join(f"<td>{escape(str(getattr(r, c) or ''))}</td>" for c in _COLUMNS)
        + "</tr>"
        for r in rows
    )
    table = f"<h1>예약 목록 ({len(rows)})</h1><table><tr>{head}</tr>{body_rows}</table>"
    return _PAGE.format(title="Reservations", body=table)
