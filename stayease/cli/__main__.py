# stayease/cli/__main__.py
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, Optional, Sequence

from stayease.clients import ApiError
from stayease.logging_config import attach_session, configure_logging
from stayease.main import StayEaseApp, create_app
from stayease.presenters import ListingFilterForm, BookingForm, present_listing
from stayease.presenters.notifications import present_notification
from stayease.schemas import Role
from stayease.views import (
    BookAppointmentView,
    GuardedView,
    OwnerDashboardView,
    OwnerNotificationsView,
    TenantAppointmentsView,
    TenantDashboardView,
    TenantListingsView,
    ViewState,
)


def _view_failure(view: GuardedView) -> Optional[dict[str, Any]]:
    if view.state == ViewState.REDIRECTING:
        return {"ok": False, "redirect": view.redirect_to}
    if view.state == ViewState.ERROR:
        return {"ok": False, "error": view.error}
    return None


async def _register(app: StayEaseApp, args) -> dict[str, Any]:
    await app.register(full_name=args.full_name, email=args.email, password=args.password, role=Role(args.role))
    return {"ok": True, "email": args.email, "role": args.role}


async def _listings(app: StayEaseApp, args) -> dict[str, Any]:
    await app.sign_in(args.email, args.password)
    view = app.view(TenantListingsView)
    await view.mount()
    bad = _view_failure(view)
    if bad is not None:
        return bad

    form = ListingFilterForm(location=args.location or "", availability_status=args.availability or "", floor_number=args.floor or "")
    if any((args.location, args.availability, args.floor)) and not await view.apply_filter(form):
        return {"ok": False, "error": view.error}
    return {"ok": True, "listings": [present_listing(x).as_dict() for x in view.filtered]}


async def _book(app: StayEaseApp, args) -> dict[str, Any]:
    await app.sign_in(args.email, args.password)
    view = app.view(BookAppointmentView, listing_id=args.listing_id)
    await view.mount()
    bad = _view_failure(view)
    if bad is not None:
        return bad

    ok = await view.submit(BookingForm(appointment_date=args.date, appointment_time=args.time, notes=args.notes or ""))
    if not ok:
        return {"ok": False, "error": view.error}
    return {"ok": True, "listing_id": args.listing_id, "next": view.redirect_to}


async def _appointments(app: StayEaseApp, args) -> dict[str, Any]:
    await app.sign_in(args.email, args.password)
    view = app.view(TenantAppointmentsView)
    await view.mount()
    bad = _view_failure(view)
    if bad is not None:
        return bad
    return {"ok": True, "counts": view.tab_counts(), "appointments": [c.as_dict() for c in view.tab(args.tab)]}


async def _dashboard(app: StayEaseApp, args) -> dict[str, Any]:
    ident = await app.sign_in(args.email, args.password)
    cls = OwnerDashboardView if ident.role == Role.OWNER else TenantDashboardView
    view = app.view(cls)
    await view.mount()
    bad = _view_failure(view)
    if bad is not None:
        return bad
    return {"ok": True, "role": ident.role.value, "stats": view.rollup.as_dict()}


async def _notifications(app: StayEaseApp, args) -> dict[str, Any]:
    await app.sign_in(args.email, args.password)
    view = app.view(OwnerNotificationsView)
    await view.mount()
    bad = _view_failure(view)
    if bad is not None:
        return bad
    if args.mark_all_read and not await view.mark_all_as_read():
        return {"ok": False, "error": view.error}
    return {"ok": True, "summary": view.summary, "notifications": [present_notification(n) for n in view.notifications]}


async def _receipt(app: StayEaseApp, args) -> dict[str, Any]:
    await app.sign_in(args.email, args.password)
    view = app.view(TenantAppointmentsView)
    await view.mount()
    bad = _view_failure(view)
    if bad is not None:
        return bad
    path = await view.download_receipt(args.appointment_id, args.out_dir)
    if path is None:
        return {"ok": False, "error": view.toast.description if view.toast else "Download failed"}
    return {"ok": True, "path": str(path)}


COMMANDS = {
    "register": _register,
    "listings": _listings,
    "book": _book,
    "appointments": _appointments,
    "dashboard": _dashboard,
    "notifications": _notifications,
    "receipt": _receipt,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="stayease")
    p.add_argument("--base-url", default=None)
    p.add_argument("--log-level", default=None)
    sub = p.add_subparsers(dest="command", required=True)

    def with_login(name: str) -> argparse.ArgumentParser:
        sp = sub.add_parser(name)
        sp.add_argument("--email", required=True)
        sp.add_argument("--password", required=True)
        return sp

    r = with_login("register")
    r.add_argument("--full-name", required=True)
    r.add_argument("--role", default="user", choices=[x.value for x in Role])

    ls = with_login("listings")
    ls.add_argument("--location")
    ls.add_argument("--availability", choices=["all", "available", "unavailable"])
    ls.add_argument("--floor")

    b = with_login("book")
    b.add_argument("--listing-id", type=int, required=True)
    b.add_argument("--date", required=True, help="YYYY-MM-DD")
    b.add_argument("--time", required=True, help="HH:MM")
    b.add_argument("--notes")

    a = with_login("appointments")
    a.add_argument("--tab", default="all", choices=["all", "pending", "confirmed", "cancelled"])

    with_login("dashboard")

    n = with_login("notifications")
    n.add_argument("--mark-all-read", action="store_true")

    rc = with_login("receipt")
    rc.add_argument("--appointment-id", type=int, required=True)
    rc.add_argument("--out-dir", default=None)

    return p


async def run(args: argparse.Namespace) -> dict[str, Any]:
    async with create_app(base_url=args.base_url, restore_session=False) as app:
        detach = attach_session(app.session)
        try:
            return await COMMANDS[args.command](app, args)
        except ApiError as e:
            return {"ok": False, "error": e.message}
        finally:
            detach()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    out = asyncio.run(run(args))
    print(out)
    if not out.get("ok"):
        sys.exit(1)


if __name__ == "__main__":
    main()
