from aiogram.utils.text_decorations import html_decoration

from revisualise_bot.data.constants import ImageRole


def get_start_message() -> str:
    """Returns the main welcome message for a new session."""
    return (
        "<b>Hug your younger self. 🤗</b>\n\n"
        "Send me a photo of you as a child and one as an adult. "
        "I'll bridge the gap of time and create a moment of the two of you together.\n\n"
        "<b>First, send the photo of you as a child</b> 👶\n"
        "<i>(Tip: under 10 years old works best!)</i>"
    )


def get_restart_message() -> str:
    """Returns the message for a user who restarts the bot."""
    return (
        "Okay, let's start a new one. Your previous session has been reset.\n\n"
        "<b>Please send the photo of you as a child.</b> 👶"
    )


def get_photo_prompt(role: ImageRole) -> str:
    if role is ImageRole.CHILD:
        return "Send an old photo of you as a child 👶"
    return "Send a recent photo of you as an adult 🧑"


def get_photo_received(role: ImageRole) -> str:
    if role is ImageRole.CHILD:
        return "👶 Got the child photo!"
    return "🧑 Got the adult photo!"


def get_control_message(is_ready: bool) -> str:
    if is_ready:
        return "Both photos are in. Ready when you are! ✨"
    return "Please upload both photos to continue."


def get_generating_message() -> str:
    return "⏳ Revising Time..."


def get_generating_details_message() -> str:
    return (
        "🎨 Blending the years together...\n"
        "<i>This usually takes about 20-30 seconds.</i>"
    )


def get_success_caption() -> str:
    return (
        "<b>Your Journey Revisualised</b>\n"
        "A special moment that never happened, but now exists."
    )


def get_error_message(message: str) -> str:
    """Quotes the message, which may come from the image service, for HTML parse mode."""
    return f"😔 {html_decoration.quote(message)}"
