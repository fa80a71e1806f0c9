"""Upstream unicafe fetch and JSON decoding."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from unari.config import HTTP_TIMEOUT_SECONDS, UNICAFE_API_URL
from unari.data import category_for_label
from unari.models import (
    Location,
    Menu,
    MenuData,
    MenuItem,
    Price,
    Restaurant,
    VisitingHours,
    loose_value,
)

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Menus could not be fetched or decoded."""


def _text(raw: Any) -> str:
    return raw.strip() if isinstance(raw, str) else ""


def _int(raw: Any) -> int:
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    return 0


def _mapping(raw: Any) -> dict:
    return raw if isinstance(raw, dict) else {}


def _list(raw: Any) -> list:
    return raw if isinstance(raw, list) else []


def decode_item(raw: dict) -> MenuItem:
    price_raw = _mapping(raw.get("price"))
    price = Price(name=_text(price_raw.get("name")), value=loose_value(price_raw.get("value")))
    return MenuItem(
        name=_text(raw.get("name")),
        category=category_for_label(price.name),
        price=price,
        ingredients=_text(raw.get("ingredients")),
        nutrition=_text(raw.get("nutrition")),
    )


def decode_menu(raw: dict) -> Menu:
    items = tuple(decode_item(item) for item in _list(raw.get("data")) if isinstance(item, dict) and _text(item.get("name")))
    return Menu(date=_text(raw.get("date")), items=items, message=_text(raw.get("message")))


def decode_menu_data(raw: dict) -> MenuData:
    hours = _mapping(raw.get("visitingHours"))
    return MenuData(
        menus=tuple(decode_menu(menu) for menu in _list(raw.get("menus")) if isinstance(menu, dict)),
        id=_int(raw.get("id")),
        name=_text(raw.get("name")),
        email=_text(raw.get("email")),
        phone=_text(raw.get("phone")),
        address=_text(raw.get("address")),
        feedback_address=_text(raw.get("feedback_address")),
        description=_text(raw.get("description")),
        visiting_hours=VisitingHours(
            business=loose_value(hours.get("business")),
            breakfast=loose_value(hours.get("breakfast")),
            bistro=loose_value(hours.get("bistro")),
            lunch=loose_value(hours.get("lounas")),
        ),
        areacode=_int(raw.get("areacode")),
    )


def decode_restaurant(raw: dict) -> Restaurant:
    title = _text(raw.get("title"))
    if not title:
        raise ValueError("restaurant without a title")
    return Restaurant(
        title=title,
        menu_data=decode_menu_data(_mapping(raw.get("menuData"))),
        id=_int(raw.get("id")),
        slug=_text(raw.get("slug")),
        address=_text(raw.get("address")),
        locations=tuple(
            Location(id=_int(loc.get("id")), name=_text(loc.get("name")))
            for loc in _list(raw.get("location"))
            if isinstance(loc, dict)
        ),
    )


def decode_restaurants(payload: Any) -> list[Restaurant]:
    """Decode the restaurant list, skipping malformed entries."""
    if not isinstance(payload, list):
        raise FetchError(f"expected a list of restaurants, got {type(payload).__name__}")

    restaurants: list[Restaurant] = []
    for idx, raw in enumerate(payload):
        if not isinstance(raw, dict):
            logger.warning("skipping restaurant #%d: not an object", idx)
            continue
        try:
            restaurants.append(decode_restaurant(raw))
        except ValueError as exc:
            logger.warning("skipping restaurant #%d: %s", idx, exc)
    return restaurants


async def fetch_menus(url: str = UNICAFE_API_URL, client: httpx.AsyncClient | None = None) -> list[Restaurant]:
    """Fetch and decode all restaurants. Raises FetchError on any failure."""
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS, follow_redirects=True) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
        raise FetchError(f"request failed: {exc}") from exc
    except ValueError as exc:
        raise FetchError(f"invalid JSON: {exc}") from exc

    restaurants = decode_restaurants(payload)
    logger.info("fetched %d restaurants from %s", len(restaurants), url)
    return restaurants
