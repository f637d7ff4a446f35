from revisualise_bot.bot import main

main()
