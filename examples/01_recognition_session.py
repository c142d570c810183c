"""Console front end for a RecognitionSessionController.

Plays the role of the presentation layer: it subscribes to the controller's
notification channels, maps them to messages, and drives the session from
typed commands.

Workflow
--------
1. Optional: put ``GOOGLE_PROJECT_ID`` in a ``.env`` file and install
   ``speech-session[microphone]`` to use the Google engine.
2. Run ``python 01_recognition_session.py --engine google`` (or leave the
   default ``virtual`` engine and type ``say <text>`` to inject results).
3. Type ``help`` to list the commands.
"""

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime

import dotenv
from colorama import Fore

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from speech_session import (  # type: ignore
    InitializationError,
    RecognitionSessionController,
    SessionConfig,
    VirtualRecognitionService,
)

COMMANDS = """Commands:
  start [text]     start recognition (text is passed as a phrase hint)
  pause            pause recognition
  stop             stop recognition (locks start until clear)
  clear            clear the result and unlock
  restart [text]   clear, then start
  lang [code]      show supported languages or change language
  sound on|off     change the sound cue setting
  say <text>       inject a final result (virtual engine only)
  quit             exit"""


def print_event(msg: str) -> None:
    """Print an event with a timestamp."""

    now = datetime.now().strftime("%H:%M:%S.%f")
    print(f"[{now}] {msg}")


def parse_args():
    parser = argparse.ArgumentParser(description="Drive a speech recognition session from the console")
    parser.add_argument("--engine", default="virtual", help="recognition engine (virtual, google)")
    parser.add_argument("--settings", default=None, help="JSON file used to persist settings")
    parser.add_argument("--require-sound", action="store_true", help="refuse to start while sound cues are off")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser.parse_args()


def main() -> None:
    dotenv.load_dotenv()
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = SessionConfig(
        recognition_engine=args.engine,
        settings_store="json" if args.settings else "memory",
        settings_path=args.settings,
        require_sound_on=args.require_sound,
    )
    controller = RecognitionSessionController.from_config(config)

    controller.result_changed.subscribe(
        lambda event: print_event(f"{Fore.GREEN}Result: {event['result']}{Fore.RESET}")
    )
    controller.active_state_changed.subscribe(
        lambda event: print_event(f"{Fore.CYAN}Recognition {'active' if event['active'] else 'inactive'}{Fore.RESET}")
    )
    controller.service_error.subscribe(
        lambda event: print_event(f"{Fore.RED}Service error: {event.get('error')}{Fore.RESET}")
    )
    controller.recognition_error.subscribe(
        lambda event: print_event(f"{Fore.YELLOW}Recognition failed: {event.get('error')}{Fore.RESET}")
    )

    if not asyncio.run(controller.check_permissions()):
        print(f"{Fore.RED}Required permissions were not granted. Closing.{Fore.RESET}")
        return

    try:
        asyncio.run(controller.initialize())
    except InitializationError as e:
        print(f"{Fore.RED}{e}{Fore.RESET}")
        return

    print(f"Language: {controller.language}, sound cues: {'on' if controller.sound_on else 'off'}")
    print(COMMANDS)

    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            break

        command, _, argument = line.partition(" ")
        text = argument or None

        if command == "quit":
            break
        elif command in ("start", "restart"):
            outcome = controller.start(text) if command == "start" else controller.restart(text)
            if not outcome.accepted:
                print(f"{Fore.YELLOW}Start refused: {outcome.name.lower()}{Fore.RESET}")
        elif command == "pause":
            controller.pause()
        elif command == "stop":
            controller.stop()
        elif command == "clear":
            controller.clear()
        elif command == "lang":
            if text is None:
                print(", ".join(controller.supported_languages))
            elif controller.recognition_active:
                print(f"{Fore.YELLOW}Settings are unavailable while recognition is active{Fore.RESET}")
            else:
                controller.set_language(text)
        elif command == "sound" and argument in ("on", "off"):
            controller.set_sound_on(argument == "on")
        elif command == "say" and isinstance(controller.service, VirtualRecognitionService):
            controller.service.push_result(argument)
        else:
            print(COMMANDS)

    controller.stop()
    controller.close()


if __name__ == "__main__":
    main()
