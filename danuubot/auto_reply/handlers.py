"""
Built-in command actions.

Each action answers through the command context and catches its own
network failures, turning them into a chat notice.
"""

import random
from datetime import datetime

from loguru import logger

from danuubot.auto_reply import content
from danuubot.auto_reply.commands import Command, CommandContext, CommandRegistry, MatchKind
from danuubot.bus.events import AudioPayload, ImagePayload, InboundMessage, StickerPayload, VideoPayload
from danuubot.channels.parsing import extract_view_once_media, is_view_once


def format_clock(moment: datetime) -> str:
    """Format a time as en-US 12-hour clock, e.g. ``3:07 PM``."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


async def handle_start(cmd: Command, ctx: CommandContext) -> None:
    await ctx.reply_text(content.START_TEXT)


async def handle_ping(cmd: Command, ctx: CommandContext) -> None:
    await ctx.reply_text(content.PONG_TEXT)


async def handle_help(cmd: Command, ctx: CommandContext) -> None:
    await ctx.reply_text(content.HELP_TEXT)


async def handle_info(cmd: Command, ctx: CommandContext) -> None:
    await ctx.reply_text(content.INFO_TEXT)


async def handle_alive(cmd: Command, ctx: CommandContext) -> None:
    await ctx.reply(ImagePayload(url=content.ALIVE_IMAGE_URL, caption=content.ALIVE_CAPTION))


async def handle_image(cmd: Command, ctx: CommandContext) -> None:
    await ctx.reply(ImagePayload(url=content.IMAGE_URL, caption=content.IMAGE_CAPTION))


async def handle_song(cmd: Command, ctx: CommandContext) -> None:
    song_name = cmd.args_str
    if not song_name:
        await ctx.reply_text(content.SONG_MISSING_NAME)
        return

    await ctx.reply_text(content.SONG_SEARCHING.format(name=song_name))

    try:
        await ctx.reply(AudioPayload(
            url=content.SONG_AUDIO_URL,
            file_name=f"{song_name}.mp3",
            caption=content.SONG_CAPTION.format(name=song_name),
        ))
    except Exception as e:
        logger.error(f"Error sending audio message: {e}")
        await ctx.reply_text(content.SONG_FAILED)


async def handle_getdp(cmd: Command, ctx: CommandContext) -> None:
    message = ctx.message
    target = message.quoted.participant if message.quoted is not None else message.chat_id

    try:
        if not target:
            raise ValueError("quoted message has no participant")
        dp_url = await ctx.client.profile_picture_url(target, "image")
        if dp_url:
            await ctx.reply(ImagePayload(url=dp_url, caption=content.DP_CAPTION))
        else:
            await ctx.reply_text(content.DP_MISSING)
    except Exception as e:
        logger.error(f"Error getting DP for {target}: {e}")
        await ctx.reply_text(content.DP_FAILED)


async def handle_statusview(cmd: Command, ctx: CommandContext) -> None:
    if cmd.args_str.lower() == "on":
        ctx.flags.set_auto_status_view(True)
        await ctx.reply_text(content.STATUS_VIEW_ON)
    elif cmd.args_str.lower() == "off":
        ctx.flags.set_auto_status_view(False)
        await ctx.reply_text(content.STATUS_VIEW_OFF)
    else:
        await ctx.reply_text(content.STATUS_VIEW_USAGE)


async def handle_antidelete(cmd: Command, ctx: CommandContext) -> None:
    if cmd.args_str.lower() == "on":
        ctx.flags.set_anti_delete(True)
        await ctx.reply_text(content.ANTI_DELETE_ON)
    elif cmd.args_str.lower() == "off":
        ctx.flags.set_anti_delete(False)
        await ctx.reply_text(content.ANTI_DELETE_OFF)
    else:
        await ctx.reply_text(content.ANTI_DELETE_USAGE)


async def handle_viewonce(cmd: Command, ctx: CommandContext) -> None:
    quoted = ctx.message.quoted
    if quoted is None or not is_view_once(quoted.message):
        await ctx.reply_text(content.VIEW_ONCE_PROMPT)
        return

    found = extract_view_once_media(quoted.message)
    if found is None:
        logger.debug("View-once message without image or video, ignoring")
        return

    media_type, media = found
    data = await ctx.client.download_media_message({f"{media_type}Message": media})
    if media_type == "image":
        await ctx.reply(ImagePayload(data=data, caption=content.VIEW_ONCE_CAPTION))
    else:
        await ctx.reply(VideoPayload(data=data, caption=content.VIEW_ONCE_CAPTION))


def has_image(message: InboundMessage) -> bool:
    return message.media is not None


async def handle_sticker(cmd: Command, ctx: CommandContext) -> None:
    data = await ctx.client.download_media_message({"imageMessage": ctx.message.media})
    await ctx.reply(StickerPayload(data=data))


async def handle_quote(cmd: Command, ctx: CommandContext) -> None:
    await ctx.reply_text(random.choice(content.QUOTES))


async def handle_echo(cmd: Command, ctx: CommandContext) -> None:
    if cmd.args_str:
        await ctx.reply_text(cmd.args_str)
    else:
        await ctx.reply_text(content.ECHO_PROMPT)


async def handle_time(cmd: Command, ctx: CommandContext) -> None:
    await ctx.reply_text(content.TIME_TEXT.format(time=format_clock(datetime.now())))


async def handle_joke(cmd: Command, ctx: CommandContext) -> None:
    await ctx.reply_text(random.choice(content.JOKES))


async def handle_greeting(cmd: Command, ctx: CommandContext) -> None:
    await ctx.reply_text(content.GREETINGS[cmd.trigger])


def register_default_handlers(registry: CommandRegistry, prefix: str = ".") -> None:
    """Register the built-in command table in match order."""
    p = prefix

    registry.register("start", handle_start, [f"{p}start"], help_text="Bot එක පටන් ගන්න.")
    registry.register("ping", handle_ping, [f"{p}ping"], help_text="Bot එක online ද කියලා බලන්න.")
    registry.register("help", handle_help, [f"{p}help", f"{p}menu"], help_text="මේ commands ලැයිස්තුව බලන්න.")
    registry.register("info", handle_info, [f"{p}info"], help_text="Bot එක ගැන විස්තර දැනගන්න.")
    registry.register("alive", handle_alive, [f"{p}alive"], help_text="Online status image.")
    registry.register("image", handle_image, [f"{p}image"], help_text="Image එකක් යවන්න.")
    registry.register("song", handle_song, [f"{p}song"], MatchKind.PREFIX, help_text="සින්දුවක් download කරගන්න.")
    registry.register("getdp", handle_getdp, [f"{p}getdp"], help_text="DP එකක් ගන්න.")
    registry.register(
        "statusview", handle_statusview, [f"{p}statusview"], MatchKind.PREFIX,
        help_text="Auto status view on/off.",
    )
    registry.register(
        "antidelete", handle_antidelete, [f"{p}antidelete"], MatchKind.PREFIX,
        help_text="Anti-delete on/off.",
    )
    registry.register("viewonce", handle_viewonce, [f"{p}viewonce"], help_text="\"View Once\" media නැවත බලන්න.")
    registry.register(
        "sticker", handle_sticker, [f"{p}sticker"], requires=has_image,
        help_text="Image එකක් sticker එකක් කරන්න.",
    )
    registry.register("quote", handle_quote, [f"{p}quote"], help_text="Random quote එකක් ගන්න.")
    registry.register("echo", handle_echo, [f"{p}echo"], MatchKind.PREFIX, help_text="ඔයා කියන එක නැවත කියනවා.")
    registry.register("time", handle_time, [f"{p}time"], help_text="වර්තමාන වේලාව කියනවා.")
    registry.register("joke", handle_joke, [f"{p}joke"], help_text="විහිළුවක් කියනවා.")
    registry.register("greeting", handle_greeting, list(content.GREETINGS), help_text="Greeting replies.")
