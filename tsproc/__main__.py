#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import logging
import sys

import click

from tsproc.exceptions import TsprocError
from tsproc.parsing.reader import fromConfig
from tsproc.version import __version__

logger = logging.getLogger("tsproc")
LOG_FORMAT = "[%(asctime)s][%(name)s][%(levelname)s]: %(message)s"


def _setupLogging(loglvl):
    logger.setLevel(loglvl)
    handler = logging.StreamHandler()
    logger.addHandler(handler)
    logging.basicConfig(level=loglvl, format=LOG_FORMAT)


def writeData(result, fname):
    if fname:
        with open(fname, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
    else:
        click.echo(json.dumps(result, indent=2))


@click.command()
@click.version_option(__version__)
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Path to a JSON configuration file.",
)
@click.option(
    "-d",
    "--data",
    type=click.Path(exists=True, dir_okay=False),
    multiple=True,
    required=True,
    help="Path to a JSON data file, holding a list of records or a list of "
    "record lists. Can be given multiple times.",
)
@click.option(
    "-o",
    "--outfile",
    type=click.Path(exists=False),
    required=False,
    help="Path to a output file. Results are written to stdout if not given.",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed of the random homogeneity check.",
)
@click.option(
    "--log-level",
    "-ll",
    default="INFO",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING"]),
    help="Set log verbosity.",
)
def main(
    config: str,
    data: tuple[str, ...],
    outfile: str | None,
    seed: int | None,
    log_level: str,
):
    # data is always a list of data files

    _setupLogging(log_level)

    try:
        tsp = fromConfig(config, data, seed=seed)
    except TsprocError as e:
        raise click.ClickException(str(e)) from e

    result = tsp.process()

    writeData(result, outfile)

    if tsp.errors:
        logger.warning(f"processing finished with {len(tsp.errors)} error(s)")
        sys.exit(1)


if __name__ == "__main__":
    main()
