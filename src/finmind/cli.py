"""Flask CLI commands for FinMind."""

from __future__ import annotations

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("finmind-seed")
    def finmind_seed() -> None:
        """Insert the default categories into an empty database."""

        from .extensions import category_registry

        added = category_registry().seed_defaults()
        if added:
            click.echo(f"Seeded {added} default categories.")
        else:
            click.echo("Categories already seeded.")

    @app.cli.command("finmind-token")
    @click.option("--email", required=True, help="Email of an existing user")
    def finmind_token(email: str) -> None:
        """Print a fresh access token for an existing user."""

        from .extensions import get_state
        from .services.auth import get_user_by_email

        state = get_state()
        user = get_user_by_email(email, state.session_factory)
        if user is None or user.deleted_at is not None:
            raise click.ClickException(f"No user with email {email}")
        click.echo(state.tokens.issue(user.id, user.email))  # type: ignore[arg-type]
