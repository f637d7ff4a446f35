from .dto import LocaleTexts, BotCommandInfo, BotInfo

texts = LocaleTexts(
    commands=[
        BotCommandInfo(command="start", description="✨ Create a new moment"),
        BotCommandInfo(command="cancel", description="↩️ Start over"),
        BotCommandInfo(command="help", description="❓ Get help"),
    ],
    bot_info=BotInfo(
        short_description="Hug your younger self ✨",
        description=(
            "Send me a photo of you as a child and one as an adult [ 👶 + 🧑 ], "
            "and my AI will bridge the gap of time with a moment of the two of you together.\n\n"
            "All moments are artificially generated."
        ),
    ),
)
