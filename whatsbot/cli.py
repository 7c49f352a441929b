"""CLI interface for whatsbot."""

import asyncio
import logging

import click
from dotenv import load_dotenv

from whatsbot import __version__
from whatsbot.core import Client, load_config
from whatsbot.models import Events

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)

CONFIG_TEMPLATE = '''# whatsbot configuration

[whatsbot]
url = "https://web.whatsapp.com/"
# A visible window is needed the first time to scan the QR code
headless = false
# Browser profile; keeps you logged in between runs
user_data_dir = ".whatsbot/session"

# Wait for the "keep your phone connected" screen before closing
destroy_waits_for_keep_session_marker = false
'''


def _make_client(config):
    return Client(load_config(config))


async def _run(config):
    client = _make_client(config)

    @client.on(Events.AUTHENTICATED)
    def on_authenticated(session):
        click.echo("🔑 Authenticated")

    @client.on(Events.READY)
    def on_ready():
        click.echo("✅ Client is ready")

    @client.on(Events.MESSAGE_RECEIVED)
    def on_message(message):
        click.echo(f"📨 {message.from_}: {message.body}")

    @client.on(Events.STATE_CHANGED)
    def on_state(state):
        click.echo(f"🔌 State: {getattr(state, 'value', state)}")

    disconnected = client.wait_for(Events.DISCONNECTED)
    try:
        await client.initialize()
        (state,) = await disconnected
        click.echo(f"❌ Disconnected: {getattr(state, 'value', state)}")
    finally:
        await client.destroy()


async def _send(config, chat_id, text, send_seen):
    client = _make_client(config)
    try:
        await client.initialize()
        message = await client.send_message(chat_id, text, send_seen=send_seen)
        click.echo(message.id.serialized)
    finally:
        await client.destroy()


@click.group()
@click.version_option(version=__version__)
def main():
    """whatsbot - WhatsApp Web automation client."""
    load_dotenv()


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
def run(config):
    """Start the client and print incoming messages.

    Opens WhatsApp Web, waits until it is ready and logs events until the
    session disconnects or you press Ctrl+C.
    """
    click.echo("🚀 Starting whatsbot...")
    try:
        asyncio.run(_run(config))
    except KeyboardInterrupt:
        click.echo("\n👋 Shutting down...")


@main.command()
@click.argument("chat_id")
@click.argument("text")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to configuration file")
@click.option("--no-seen", is_flag=True, help="Do not mark the chat as seen first")
def send(chat_id, text, config, no_seen):
    """Send TEXT to CHAT_ID (e.g. 5511999999999@c.us) and exit."""
    asyncio.run(_send(config, chat_id, text, not no_seen))


@main.command()
def init():
    """Initialize configuration file.

    Creates a config.toml template with client settings.
    """
    click.echo("📝 Creating config.toml template...")

    with open("config.toml", "w") as f:
        f.write(CONFIG_TEMPLATE)

    click.echo("✅ Created config.toml")
    click.echo("📌 Run 'whatsbot run' and scan the QR code on first start")


if __name__ == "__main__":
    main()
