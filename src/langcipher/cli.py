from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer

from langcipher.classical.common import Alphabet, resolve_alphabet
from langcipher.classical.monoalphabetic.caesar import CaesarCipher
from langcipher.core.config import Settings, configure_logging, load_settings
from langcipher.core.errors import LangCipherError, StoreUnavailableError
from langcipher.core.registry import list_stores, open_store
from langcipher.core.utils import DEFAULT_TRAINING_SEPARATORS, preprocess
from langcipher.lang.model import LanguageModel
from langcipher.store import register_all

app = typer.Typer(help="langcipher CLI: Caesar cipher tools + frequency-based language detection.")


@dataclass
class _State:
    settings: Settings
    _store: object = None

    def store(self):
        if self._store is None:
            self._store = open_store(self.settings.store, self.settings)
        return self._store

    def alphabet(self, override: Optional[str]) -> Alphabet:
        return resolve_alphabet(override or self.settings.alphabet)


@app.callback()
def _init(
    ctx: typer.Context,
    store: Optional[str] = typer.Option(None, "--store", help="Frequency store backend (memory, json, supabase)."),
    store_path: Optional[Path] = typer.Option(None, "--store-path", help="File used by the json store."),
    alphabet: Optional[str] = typer.Option(None, "--alphabet", "-a", help="Default alphabet: preset name or symbols."),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="-v for info, -vv for debug logging."),
):
    # Register store backends exactly once per CLI run
    register_all()

    settings = load_settings().with_overrides(
        store=store.lower().strip() if store else None,
        store_path=store_path,
        alphabet=alphabet,
    )
    if store and settings.store not in list_stores():
        raise typer.BadParameter(f"Unknown store '{store}'. Available: {', '.join(list_stores())}")

    level = {0: settings.log_level, 1: "INFO"}.get(verbose, "DEBUG")
    configure_logging(level)
    ctx.obj = _State(settings=settings)


def _read_input(text: Optional[str], file: Optional[Path]) -> str:
    if file is not None:
        return file.read_text(encoding="utf-8")
    if text is None:
        raise typer.BadParameter("Provide TEXT or --file.")
    return text


def _fail(e: Exception) -> None:
    """Store problems exit 1; everything else is the caller's input."""
    if isinstance(e, StoreUnavailableError):
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1)
    raise typer.BadParameter(str(e))


@app.command()
def stores():
    """List available frequency store backends."""
    for name in list_stores():
        typer.echo(name)


@app.command()
def encrypt(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Plaintext to encrypt."),
    key: int = typer.Option(..., "--key", "-k", help="Shift amount."),
    alphabet: Optional[str] = typer.Option(None, "--alphabet", "-a", help="Preset name or symbols, e.g. 'A B C'."),
):
    state: _State = ctx.obj
    try:
        typer.echo(CaesarCipher(state.alphabet(alphabet)).encrypt(text, key))
    except LangCipherError as e:
        _fail(e)


@app.command()
def decrypt(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Ciphertext to decrypt."),
    key: int = typer.Option(..., "--key", "-k", help="Shift amount used to encrypt."),
    alphabet: Optional[str] = typer.Option(None, "--alphabet", "-a", help="Preset name or symbols, e.g. 'A B C'."),
):
    """Decrypt when you already have the key."""
    state: _State = ctx.obj
    try:
        typer.echo(CaesarCipher(state.alphabet(alphabet)).decrypt(text, key))
    except LangCipherError as e:
        _fail(e)


@app.command()
def crack(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Caesar-encrypted text."),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Trained language to take the reference from."),
    reference: Optional[str] = typer.Option(
        None, "--reference", "-r", help="Most frequent plaintext symbol; skips the store lookup."
    ),
    alphabet: Optional[str] = typer.Option(None, "--alphabet", "-a", help="Preset name or symbols, e.g. 'A B C'."),
):
    """Recover the shift by frequency analysis against a language's most frequent character."""
    if not language and not reference:
        raise typer.BadParameter("Provide --language or --reference.")

    state: _State = ctx.obj
    try:
        cipher = CaesarCipher(state.alphabet(alphabet))
        if reference:
            r = cipher.crack(text, reference)
        else:
            r = cipher.crack_with_store(text, state.store(), language)
    except LangCipherError as e:
        _fail(e)
        return

    typer.echo(f"The text has been shifted {r.key} characters based on your alphabet.")
    typer.echo(f"    notes: {r.notes}  most_frequent={r.meta['most_frequent']}  reference={r.meta['reference']}")
    typer.echo(r.plaintext)


@app.command()
def train(
    ctx: typer.Context,
    language: str = typer.Argument(..., help="Language name, e.g. english."),
    text: Optional[str] = typer.Argument(None, help="Training text (or use --file)."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, dir_okay=False, help="Read training text from a file."),
    separator: Optional[List[str]] = typer.Option(
        None,
        "--separator",
        "-s",
        help="Word separator; repeat for several. Defaults to whitespace and common punctuation.",
    ),
    clean: bool = typer.Option(True, "--clean/--raw", help="Preprocess text before training."),
    noise: Optional[List[str]] = typer.Option(None, "--noise", "-n", help="Noise word to drop; repeat for several."),
):
    """Add a text sample to a language profile."""
    state: _State = ctx.obj
    body = _read_input(text, file)
    if clean:
        body = preprocess(body, noise)

    seps = list(separator) if separator else list(DEFAULT_TRAINING_SEPARATORS)
    try:
        summary = LanguageModel(state.store()).train(language, body, seps)
    except LangCipherError as e:
        _fail(e)
        return

    typer.echo(
        f"Trained '{summary.language}': {summary.total_words} words "
        f"({summary.distinct_words} distinct), {summary.total_chars} chars ({summary.distinct_chars} distinct)."
    )


@app.command()
def analyze(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Text to classify (or use --file)."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, dir_okay=False, help="Read text from a file."),
    clean: bool = typer.Option(True, "--clean/--raw", help="Preprocess text before scoring."),
    noise: Optional[List[str]] = typer.Option(None, "--noise", "-n", help="Noise word to drop; repeat for several."),
    top: int = typer.Option(0, "--top", "-t", help="Show only the N best languages (0 = all)."),
    details: bool = typer.Option(False, "--details", help="Show word/char score components."),
):
    """Estimate which trained language a text is written in."""
    state: _State = ctx.obj
    body = _read_input(text, file)
    if clean:
        body = preprocess(body, noise)

    try:
        scores = LanguageModel(state.store()).score(body)
    except LangCipherError as e:
        _fail(e)
        return

    if not scores:
        typer.echo("No trained languages.")
        raise typer.Exit(code=0)
    if sum(s.percent for s in scores) == 0:
        typer.echo("No language detected.")
        raise typer.Exit(code=0)

    if top > 0:
        scores = scores[:top]
    for s in scores:
        typer.echo(f"{s.language} ({s.percent:.4f}%)")
        if details:
            typer.echo(
                f"    words={s.word_score:.4f}  chars={s.char_score:.4f}  missing={s.missing}  transient={s.transient}"
            )


@app.command()
def languages(ctx: typer.Context):
    """List languages with stored frequency profiles."""
    state: _State = ctx.obj
    try:
        names = sorted(state.store().list_languages())
    except LangCipherError as e:
        _fail(e)
        return
    for name in names:
        typer.echo(name)


@app.command()
def clean(
    text: Optional[str] = typer.Argument(None, help="Text to clean (or use --file)."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", exists=True, dir_okay=False),
    noise: Optional[List[str]] = typer.Option(None, "--noise", "-n", help="Noise word to drop; repeat for several."),
):
    """Show what preprocessing does to a text."""
    typer.echo(preprocess(_read_input(text, file), noise))


def main():
    app()


if __name__ == "__main__":
    main()
