from docassist.assistant import build_assistant
from docassist.config.settings import Settings
from docassist.console.shell import Shell
from docassist.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> build the assistant -> run the shell."""
    settings = Settings()
    Log.configure(settings.log_level)
    assistant = build_assistant(settings)

    try:
        Shell(assistant).run()
    finally:
        assistant.shutdown()


if __name__ == "__main__":
    main()
