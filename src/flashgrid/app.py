"""Interactive CLI application."""
import logging
import os
import time
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt, IntPrompt
from rich.table import Table
from rich.text import Text

from flashgrid.block_session import BlockSession, SessionState
from flashgrid.db import init_db, DEFAULT_DB_PATH
from flashgrid.flip_session import FlipSession
from flashgrid.importer import import_file
from flashgrid.languages import LANGUAGES, insert_character, palette_for, speech_code
from flashgrid.seed import seed_all, is_seeded
from flashgrid.sets import create_set, delete_set, list_sets, load_set, get_direction, set_direction

console = Console()
logger = logging.getLogger("flashgrid")

EXIT_WORDS = ("q", "menu")
COMMAND_PREFIX = ":"


class SessionExitRequested(Exception):
    """Raised when the user leaves a study session from a prompt."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def session_int_prompt(prompt: str, choices: list = None) -> int:
    return int(session_prompt(prompt, choices=choices))


def parse_command(raw: str) -> str | None:
    """Session command typed as ':name'; anything else is an answer."""
    text = raw.strip()
    if not text.startswith(COMMAND_PREFIX):
        return None
    return text[len(COMMAND_PREFIX):].strip().lower()


def setup_logging() -> None:
    level = os.environ.get("FLASHGRID_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def show_welcome():
    console.print(Panel(
        "[bold]FlashGrid[/bold]\n[dim]Flashcards with a block puzzle[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("sets", "List flashcard sets"),
        ("block", "Block puzzle study mode"),
        ("flip", "Flip-card review"),
        ("new", "Create a set by typing cards"),
        ("import", "Import a set from a file"),
        ("delete", "Delete a set"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def speak(text: str, language: str | None) -> None:
    console.print(f"[dim]🔊 ({speech_code(language, text)}) {escape(text)}[/dim]")


def render_grid(grid: list) -> Table:
    table = Table(show_header=True, show_lines=False, box=None, pad_edge=False)
    table.add_column("")
    for c in range(len(grid[0])):
        table.add_column(str(c + 1), justify="center")
    for r, row in enumerate(grid):
        cells = ["[green]■[/green]" if cell else "[dim]·[/dim]" for cell in row]
        table.add_row(str(r + 1), *cells)
    return table


def render_shape(shape) -> Text:
    lines = ["".join("■ " if cell else "  " for cell in row).rstrip() for row in shape]
    return Text("\n".join(lines), style="green")


def render_offers(offers: dict) -> Table:
    table = Table(show_header=True, box=None)
    for offer_id in offers:
        table.add_column(f"#{offer_id}", justify="left")
    table.add_row(*(render_shape(shape) for shape in offers.values()))
    return table


def choose_set(db_path: str):
    sets = list_sets(db_path)
    if not sets:
        console.print("[yellow]No flashcard sets yet. Use 'import' to add one.[/yellow]")
        return None
    show_sets_table(sets)
    choice = IntPrompt.ask("Select set", choices=[str(i) for i in range(1, len(sets) + 1)])
    card_set = load_set(db_path, sets[choice - 1]["id"])
    if card_set is None:
        console.print("[red]That set could not be found.[/red]")
    return card_set


def show_sets_table(sets: list) -> None:
    table = Table(title="Flashcard Sets")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Cards", justify="right")
    table.add_column("Description", style="dim")
    for i, s in enumerate(sets, 1):
        table.add_row(str(i), escape(s["title"]), str(s["card_count"]), escape(s["description"] or ""))
    console.print(table)


def pick_character(chars: list, draft: str) -> str:
    if not chars:
        console.print("[dim]No special characters to insert.[/dim]")
        return draft
    console.print("  ".join(f"[cyan]{i}[/cyan]){ch}" for i, ch in enumerate(chars, 1)))
    index = session_int_prompt("Character", choices=[str(i) for i in range(1, len(chars) + 1)])
    return insert_character(draft, chars[index - 1])


def ask_answer(chars: list, hint: str, draft: str = "") -> str:
    """Prompt for an answer; ':chars' inserts a special character into the draft."""
    while True:
        answer = session_prompt(hint, default=draft) if draft else session_prompt(hint)
        if parse_command(answer) == "chars":
            draft = pick_character(chars, draft)
            continue
        return answer


# --- block mode ---

def show_block_summary(session: BlockSession) -> None:
    summary = session.summary()
    console.print(Panel(
        f"[bold yellow]Score: {summary.score}[/bold yellow]\n"
        f"Correct answers: {summary.correct}/{summary.answered}  |  "
        f"Blocks placed: {summary.blocks_placed}  |  Lines cleared: {summary.lines_cleared}",
        title="Game Over!", border_style="magenta",
    ))


def place_from_input(session: BlockSession, raw: str) -> None:
    parts = raw.split()
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        console.print("[red]Enter: block row col (e.g. 1 3 4)[/red]")
        return
    offer_id, row, col = (int(p) for p in parts)
    result = session.place_block(offer_id, row - 1, col - 1)
    if result is None:
        console.print(f"[red]No block #{offer_id} on offer.[/red]")
    elif not result.placed:
        console.print("[red]That block doesn't fit there.[/red]")
    elif result.lines_cleared:
        console.print(f"[green]Cleared {result.lines_cleared} line(s)! +{result.bonus}[/green]")


def run_block_session(session: BlockSession, sleep=time.sleep) -> None:
    if session.state == SessionState.NOT_LOADED:
        console.print("[red]Flashcard set not found.[/red]")
        return
    if session.state == SessionState.NO_CARDS:
        console.print("[yellow]This set has no cards yet. Add some before studying![/yellow]")
        return
    while True:
        if session.state == SessionState.SESSION_OVER:
            console.print(render_grid(session.grid))
            show_block_summary(session)
            again = Prompt.ask("Play again?", choices=["y", "n"], default="y")
            if again != "y":
                return
            session.restart()
        elif session.state == SessionState.ADVANCING_CARD:
            if session.last_result is False:
                console.print(f"[red]Try again![/red] Answer: [green]{escape(session.expected)}[/green]")
            session.scheduler.wait(sleep)
        elif session.state == SessionState.BLOCKS_OFFERED:
            console.print(render_grid(session.grid))
            console.print(render_offers(session.offers))
            raw = session_prompt(f"[yellow]🏆 {session.score}[/yellow] Place (block row col, ':restart')")
            if parse_command(raw) == "restart":
                session.restart()
                continue
            place_from_input(session, raw)
        else:
            console.print(Panel(escape(session.prompt), title=f"🏆 {session.score}", border_style="cyan"))
            answer = ask_answer(palette_for(session.expected_language),
                                "Your answer (':skip', ':chars', ':restart', 'q')")
            command = parse_command(answer)
            if command == "skip":
                session.skip_card()
            elif command == "restart":
                session.restart()
            elif command is not None:
                console.print("[dim]Commands: :skip :chars :restart[/dim]")
            elif session.submit_answer(answer):
                console.print(f"[green]Correct![/green] +10  {escape(session.expected)}")


def cmd_block(db_path: str):
    card_set = choose_set(db_path)
    if card_set is None:
        return
    session = BlockSession(ask_in_question_language=get_direction(db_path, card_set.id))
    session.start(card_set)
    run_block_session(session)


# --- flip mode ---

FLIP_HELP = (
    "Type an answer, or a command: :f=flip :n=next :p=prev :k=know :d=don't know "
    ":t=toggle :say :chars :s=summary :r=restart q=quit"
)


def show_flip_card(session: FlipSession) -> None:
    card = session.current_card
    side = "Back" if session.is_flipped else "Front"
    body = escape(session.visible_text)
    if card.image_url:
        body += f"\n[dim]{escape(card.image_url)}[/dim]"
    if session.last_result is not None:
        body += "\n\n" + ("[green]Correct![/green]" if session.last_result
                          else f"[red]Incorrect.[/red] Correct answer: {escape(session.expected)}")
    console.print(Panel(
        body, title=f"{side} — {session.position + 1}/{session.total}", border_style="cyan",
    ))


def show_flip_summary(session: FlipSession) -> None:
    summary = session.summary()
    table = Table(title="Summary")
    table.add_column("Known", style="green", justify="right")
    table.add_column("Don't know", style="red", justify="right")
    table.add_column("Unrated", style="dim", justify="right")
    table.add_row(str(summary.known), str(summary.unknown), str(summary.unrated))
    console.print(table)


def run_flip_session(db_path: str, session: FlipSession) -> None:
    if session.card_set is None:
        console.print("[red]Flashcard set not found.[/red]")
        return
    if not session.has_cards:
        console.print("[yellow]This set has no cards yet. Add some before studying![/yellow]")
        return
    console.print(f"[dim]{FLIP_HELP}[/dim]")
    while True:
        if session.showing_summary:
            show_flip_summary(session)
            again = Prompt.ask("Study again?", choices=["y", "n"], default="n")
            if again != "y":
                return
            session.restart()
        show_flip_card(session)
        raw = session_prompt("Answer or :command")
        command = parse_command(raw)
        if command is None:
            session.submit_answer(raw)
        elif command == "f":
            session.flip()
        elif command == "n":
            session.next()
        elif command == "p":
            session.previous()
        elif command in ("k", "d"):
            if not session.is_flipped:
                console.print("[dim]Flip the card first.[/dim]")
            elif command == "k":
                session.mark_known()
            else:
                session.mark_dont_know()
        elif command == "t":
            set_direction(db_path, session.card_set.id, session.toggle_direction())
        elif command == "say":
            speak(session.visible_text, session.visible_language)
        elif command == "chars":
            chars = session.palette()
            draft = pick_character(chars, "")
            session.submit_answer(ask_answer(chars, "Answer", draft))
        elif command == "s":
            if session.view_summary() is None:
                console.print("[dim]The summary opens from the last card.[/dim]")
        elif command == "r":
            session.restart()
        else:
            console.print(f"[dim]{FLIP_HELP}[/dim]")


def cmd_flip(db_path: str):
    card_set = choose_set(db_path)
    if card_set is None:
        return
    session = FlipSession(ask_in_question_language=get_direction(db_path, card_set.id))
    session.start(card_set)
    run_flip_session(db_path, session)


# --- library ---

def ask_language(prompt: str) -> str | None:
    language = Prompt.ask(prompt, choices=list(LANGUAGES), default="none")
    return None if language == "none" else language


def cmd_sets(db_path: str):
    sets = list_sets(db_path)
    if not sets:
        console.print("[yellow]No flashcard sets yet.[/yellow]")
        return
    show_sets_table(sets)


def cmd_new(db_path: str):
    title = Prompt.ask("Title").strip()
    if not title:
        console.print("[red]A set needs a title.[/red]")
        return
    description = Prompt.ask("Description", default="")
    question_language = ask_language("Question language")
    answer_language = ask_language("Answer language")
    console.print("[dim]Enter cards one at a time. Leave the question blank to finish.[/dim]")
    cards = []
    while True:
        question = Prompt.ask(f"Question {len(cards) + 1}", default="").strip()
        if not question:
            break
        answer = Prompt.ask("Answer").strip()
        if not answer:
            console.print("[yellow]Skipped: a card needs an answer.[/yellow]")
            continue
        cards.append({
            "question": question,
            "answer": answer,
            "question_language": question_language,
            "answer_language": answer_language,
        })
    card_set = create_set(db_path, title, cards, description=description)
    console.print(f"[green]Created '{escape(card_set.title)}' ({len(card_set.cards)} cards)[/green]")


def cmd_delete(db_path: str):
    sets = list_sets(db_path)
    if not sets:
        console.print("[yellow]No flashcard sets yet.[/yellow]")
        return
    show_sets_table(sets)
    choice = IntPrompt.ask("Delete set", choices=[str(i) for i in range(1, len(sets) + 1)])
    target = sets[choice - 1]
    if not Confirm.ask(f"Delete '{escape(target['title'])}' and its {target['card_count']} cards?", default=False):
        console.print("[dim]Kept.[/dim]")
        return
    if delete_set(db_path, target["id"]):
        console.print(f"[green]Deleted '{escape(target['title'])}'.[/green]")
    else:
        console.print("[red]That set could not be found.[/red]")


def cmd_import(db_path: str):
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {escape(file_path)}[/red]")
        return
    result = import_file(db_path, file_path)
    console.print(f"[green]Imported {escape(result['filename'])} → '{escape(result['title'])}' ({result['cards']} cards)[/green]")


def main():
    setup_logging()
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    first_run = not is_seeded(db_path)
    if first_run:
        console.print("[dim]Setting up for first use...[/dim]")
    seed_all(db_path)
    if first_run:
        console.print("[green]Ready![/green]\n")

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="block").strip().lower()
        try:
            if choice == "sets":
                cmd_sets(db_path)
            elif choice == "block":
                cmd_block(db_path)
            elif choice == "flip":
                cmd_flip(db_path)
            elif choice == "new":
                cmd_new(db_path)
            elif choice == "import":
                cmd_import(db_path)
            elif choice == "delete":
                cmd_delete(db_path)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Happy studying![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except SessionExitRequested:
            console.print("[dim]Back to menu.[/dim]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.debug("Command %s failed", choice, exc_info=True)
            console.print(f"[red]Error: {escape(str(e))}[/red]")


if __name__ == "__main__":
    main()
