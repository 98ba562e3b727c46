"""
A command-line script to generate sentences from a word chain.

It builds a chain from one or more text files and prints randomly generated
sentences, optionally only those containing a set of required words.
"""
import logging
import random
import sys
import time
from pathlib import Path

import click

from . import config
from .markov_chain import ChainModel, EmptyModelError, NoMatchFoundError, generate_sentences


@click.command()
@click.option('--file', '-f', 'files', multiple=True, required=True,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Source text file. Repeat to combine several files.")
@click.option('--sentences', '-s', 'count', type=click.IntRange(min=0), default=1, show_default=True,
              help="Number of sentences to generate.")
@click.option('--required', '-r', 'required_words', multiple=True,
              help="Word every sentence must contain. Repeat for several words.")
@click.option('--word-length', '-w', type=click.IntRange(min=1), default=config.DEFAULT_WORD_LENGTH,
              show_default=True, help="Number of words captured by each link.")
@click.option('--parallel', '-p', is_flag=True, help=f"Generate with {config.NUM_WORKERS} workers.")
@click.option('--seed', type=int, default=None, help="Seed for the random source.")
@click.option('--max-attempts', type=click.IntRange(min=0), default=config.MAX_ATTEMPTS, show_default=True,
              help="Give up after this many attempts when filtering on required words (0 = never).")
@click.option('--progress/--no-progress', default=False, help="Show a progress bar.")
@click.option('--verbose', '-v', is_flag=True, help="Enable debug logging.")
def main(files, count, required_words, word_length, parallel, seed, max_attempts, progress, verbose):
    """
    Builds a word chain from the given files and prints generated sentences.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format='%(levelname)s: %(message)s')

    sources = []
    for path in files:
        try:
            sources.append(path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError) as e:
            click.secho(f"Error loading file {path}: {e}", fg='red', err=True)
            sys.exit(1)

    click.echo("Building chain...")
    model = ChainModel.from_sources(sources, word_length=word_length)

    click.echo(f"Generating {count} sentence(s)...")
    rng = random.Random(seed) if seed is not None else None
    start = time.perf_counter()
    try:
        sentences = generate_sentences(
            model,
            count=count,
            required_words=required_words,
            parallel=parallel,
            rng=rng,
            max_attempts=max_attempts,
            progress=progress,
        )
    except EmptyModelError:
        click.secho("The source files contain no words to build sentences from.", fg='red', err=True)
        sys.exit(1)
    except NoMatchFoundError as e:
        click.secho(str(e), fg='red', err=True)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    click.echo(f"Finished in {elapsed} seconds.")

    click.echo("Results:")
    click.echo("\n\n".join(sentences))


if __name__ == '__main__':
    main()
