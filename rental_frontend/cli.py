"""Command-line access to the signed-in user's favorites."""

import asyncio
import sys

import click

from rental_frontend.log_config import configure_logging
from rental_frontend.models.enums import FavoritesSort
from rental_frontend.state.errors import FavoritesError
from rental_frontend.state.favorites import FavoritesStateManager
from rental_frontend.utils.api_client import get_api_client
from rental_frontend.utils.session import StaticTokenProvider


def _build_manager(token: str | None) -> FavoritesStateManager:
    return FavoritesStateManager(
        api_client=get_api_client(),
        token_provider=StaticTokenProvider(token),
    )


def _fail(error: FavoritesError) -> None:
    err = error.to_dict()["error"]
    click.echo(f"Error [{err['code']}]: {err['message']}", err=True)
    sys.exit(1)


@click.group()
@click.option("--token", envvar="RENTAL_TOKEN", help="Session token (or RENTAL_TOKEN)")
@click.option("--log-level", default=None, help="Override log level")
@click.pass_context
def cli(ctx, token, log_level):
    """Rental favorites client."""
    configure_logging(level=log_level, fmt="console")
    ctx.obj = _build_manager(token)


@cli.command("list")
@click.option(
    "--sort",
    type=click.Choice([s.value for s in FavoritesSort]),
    default=FavoritesSort.RECENTLY_ADDED.value,
    show_default=True,
)
@click.pass_obj
def list_favorites(manager: FavoritesStateManager, sort):
    """List favorited listings."""
    try:
        favorites = asyncio.run(manager.load())
    except FavoritesError as e:
        _fail(e)
        return

    click.echo(f"{len(favorites)} favorite(s)")
    shown = set()
    for listing in manager.listings(FavoritesSort(sort)):
        shown.add(listing.id)
        rent = f"${listing.rent_money:,.0f}/month" if listing.rent_money is not None else "-"
        click.echo(f"  {listing.id}  {listing.location or '?'}  {rent}")
    for listing_id in sorted(set(favorites) - shown):
        click.echo(f"  {listing_id}")


@cli.command("toggle")
@click.argument("listing_id")
@click.pass_obj
def toggle_favorite(manager: FavoritesStateManager, listing_id):
    """Add or remove a listing from favorites."""

    async def run():
        await manager.load()
        return await manager.toggle(listing_id)

    try:
        favorites = asyncio.run(run())
    except FavoritesError as e:
        _fail(e)
        return

    state = "favorited" if listing_id in favorites else "unfavorited"
    click.echo(f"{listing_id}: {state}")


if __name__ == "__main__":
    cli()
