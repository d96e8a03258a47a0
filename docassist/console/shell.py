import json
import mimetypes
import re
import shlex
import sys
import threading
import time
from collections.abc import Callable
from typing import TextIO

from docassist.assistant import Assistant
from docassist.chat.formatting import format_file_size, format_percent
from docassist.chat.models import Message
from docassist.documents.models import Document, UploadedFile
from docassist.documents.serializer import DocumentSerializer
from docassist.logging.logger import Log
from docassist.risk.bands import risk_label
from docassist.scheduling.manual_scheduler import ManualScheduler

_ID_PREFIX_RE = re.compile(r"[0-9a-f]+")

HELP_TEXT = """Commands:
  upload <name> <size> [mime]  add a document
  list                         list documents
  stats                        dashboard counters
  select <id>                  chat about a document (id prefix is enough)
  show <id>                    dump a document as JSON
  ask <text>                   ask about the selected document
  questions                    suggested questions
  wait <ms>                    let simulated time pass
  help                         this text
  quit                         leave
Lines that do not fit a command are sent as questions."""


class Shell:
    """Interactive loop: read a line -> dispatch -> print.

    Analysis completions and bot replies arrive from timer threads and are
    printed as they happen.
    """

    PROMPT = "docassist> "

    def __init__(
        self,
        assistant: Assistant,
        *,
        input_fn: Callable[[str], str] = input,
        output: TextIO | None = None,
        serializer: DocumentSerializer | None = None,
    ) -> None:
        self._assistant = assistant
        self._input = input_fn
        self._output = output if output is not None else sys.stdout
        self._serializer = serializer if serializer is not None else DocumentSerializer()
        self._output_lock = threading.Lock()
        self._commands: dict[str, Callable[[list[str]], None]] = {
            "upload": self._upload,
            "list": self._list,
            "stats": self._stats,
            "select": self._select,
            "show": self._show,
            "ask": self._ask,
            "questions": self._questions,
            "wait": self._wait,
            "help": self._help,
        }

    def run(self, max_commands: int | None = None) -> None:
        """Main loop. Runs until ``quit``, EOF or Ctrl-C.

        If max_commands is set, stop after handling that many lines.
        """
        Log.info("Shell started")
        unsubscribers = [
            self._assistant.registry.subscribe(self._on_document),
            self._assistant.session.log.subscribe(self._on_message),
        ]
        handled = 0
        try:
            while max_commands is None or handled < max_commands:
                line = self._input(self.PROMPT)
                handled += 1
                if not self.handle(line):
                    break
        except (KeyboardInterrupt, EOFError):
            Log.info("Shell shutting down")
        finally:
            for unsubscribe in unsubscribers:
                unsubscribe()

    def handle(self, line: str) -> bool:
        """Dispatch one input line. Returns False when the user asked to quit.

        A line is a command only when its first word names one and the rest
        fits that command's arguments. Anything else, such as "Show me the
        services", is sent as a question.
        """
        stripped = line.strip()
        if not stripped:
            return True
        name, _, rest = stripped.partition(" ")
        command = name.lower()
        if command in ("quit", "exit") and not rest.strip():
            return False
        if command == "ask":
            self._ask([rest])
            return True
        handler = self._commands.get(command)
        args = self._parse_args(rest) if handler is not None else None
        if handler is None or args is None or not self._accepts(command, args):
            self._ask([stripped])
            return True
        handler(args)
        return True

    @staticmethod
    def _parse_args(rest: str) -> list[str] | None:
        try:
            return shlex.split(rest)
        except ValueError:
            return None

    @staticmethod
    def _accepts(command: str, args: list[str]) -> bool:
        if command == "upload":
            return len(args) in (2, 3) and args[1].isdigit()
        if command in ("select", "show"):
            return len(args) == 1 and _ID_PREFIX_RE.fullmatch(args[0]) is not None
        if command == "wait":
            return not args or (len(args) == 1 and args[0].isdigit())
        return not args

    def _upload(self, args: list[str]) -> None:
        name, size = args[0], int(args[1])
        mime_type = args[2] if len(args) > 2 else self._guess_mime(name)
        for document in self._assistant.registry.upload([UploadedFile(name, size, mime_type)]):
            if document.status == "error":
                self._print(
                    f"Uploaded {document.name}, analysis could not start: "
                    f"{document.error_message}"
                )
                continue
            self._print(
                f"Uploaded {document.name} as {document.content.document_type} "
                f"[{document.id[:8]}], analyzing..."
            )

    def _list(self, args: list[str]) -> None:
        documents = self._assistant.registry.list_documents()
        if not documents:
            self._print("No documents uploaded yet.")
            return
        for document in documents:
            self._print(self._describe(document))

    def _stats(self, args: list[str]) -> None:
        stats = self._assistant.registry.stats()
        self._print(
            f"Total: {stats.total}  Completed: {stats.completed}  "
            f"High Risk: {stats.high_risk}  Avg Risk Score: {stats.average_risk_score:.1f}"
        )

    def _select(self, args: list[str]) -> None:
        document = self._resolve(args)
        if document is None:
            return
        self._assistant.session.select_document(document.id)
        if not document.is_completed:
            self._print("Analysis is still running; no risk view available yet.")

    def _show(self, args: list[str]) -> None:
        document = self._resolve(args)
        if document is None:
            return
        payload = self._serializer.document_to_dict(document)
        self._print(json.dumps(payload, indent=2, ensure_ascii=False))

    def _ask(self, args: list[str]) -> None:
        text = " ".join(args)
        if self._assistant.session.send(text) is None:
            self._print("Type a question about the selected document.")

    def _questions(self, args: list[str]) -> None:
        questions = self._assistant.session.quick_questions()
        if not questions:
            self._print("Select a document to see suggested questions.")
            return
        for question in questions:
            self._print(f"  - {question}")

    def _wait(self, args: list[str]) -> None:
        delay_ms = int(args[0]) if args else 1000
        scheduler = self._assistant.scheduler
        if isinstance(scheduler, ManualScheduler):
            scheduler.advance(delay_ms)
        else:
            time.sleep(delay_ms / 1000)

    def _help(self, args: list[str]) -> None:
        self._print(HELP_TEXT)

    def _resolve(self, args: list[str]) -> Document | None:
        prefix = args[0]
        matches = [
            document
            for document in self._assistant.registry.list_documents()
            if document.id.startswith(prefix)
        ]
        if len(matches) != 1:
            self._print(f"No single document matches '{prefix}'.")
            return None
        return matches[0]

    def _on_document(self, document: Document) -> None:
        if document.status == "completed":
            self._print(f"\n[analysis] {self._describe(document)}")
        elif document.status == "error":
            self._print(f"\n[analysis] {document.name} failed: {document.error_message}")

    def _on_message(self, message: Message) -> None:
        if message.sender == "bot":
            self._print(f"\n{message.content}\n")

    @staticmethod
    def _describe(document: Document) -> str:
        line = (
            f"[{document.id[:8]}] {document.name} ({format_file_size(document.size_bytes)}) "
            f"{document.content.document_type} - {document.status}"
        )
        if document.risk_score is not None:
            line += f" {format_percent(document.risk_score)} {risk_label(document.risk_score)}"
        return line

    @staticmethod
    def _guess_mime(name: str) -> str:
        guessed, _ = mimetypes.guess_type(name)
        return guessed or "application/octet-stream"

    def _print(self, text: str) -> None:
        with self._output_lock:
            self._output.write(text + "\n")
            self._output.flush()
