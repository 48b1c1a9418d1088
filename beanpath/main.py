from pathlib import Path
from typing import Any

import click
import yaml

from beanpath import VERSION
from beanpath.config import Configuration, get_configuration
from beanpath.data_helper import ABSENT
from beanpath.path import get, set_value
from beanpath.utils import global_options, end, out, verbose_out

_document_end = '\n...\n'


def _to_text(value: Any) -> str:
    """
    A function that renders a value as YAML for display.  Simple values come out as
    themselves, without YAML's document end marker.
    """
    text = yaml.safe_dump(value, default_flow_style=False, sort_keys=False, allow_unicode=True)
    if text.endswith(_document_end):
        text = text[:-len(_document_end)]
    return text.rstrip('\n')


def _read_document(path: Path) -> Any:
    with path.open(encoding='utf-8') as fd:
        return yaml.full_load(fd)


@click.command()
@click.option('--quiet', '-q', is_flag=True, help='Suppress normal output.')
@click.option('--verbose', '-v', count=True, help='Produce verbose output.  Repeat for more verbosity.')
@click.option('--config', '-c', 'config_file',
              type=click.Path(exists=True, dir_okay=False, file_okay=True, allow_dash=False, resolve_path=True),
              help='Specify the configuration file to use.  A ".beanpath.yaml" file in the current directory is '
                   'used when this is not specified.')
@click.option('--set', '-s', 'new_value', metavar='<value>',
              help='Store a value at the path instead of reading it.  The value is parsed as YAML, so "5" is a '
                   'number and "[1, 2]" a list.  The updated document is printed.')
@click.option('--in-place', '-i', is_flag=True, help='With --set, write the updated document back to its file.')
@click.option('--no-create', '-n', is_flag=True,
              help='With --set, do not create missing dictionaries or lists along the path.')
@click.option('--default', '-D', 'default_value', metavar='<value>',
              help='The value (parsed as YAML) to print if the path leads nowhere.')
@click.version_option(version=VERSION, help="Show the version of beanpath and exit.")
@click.argument('document', type=click.Path(exists=True, dir_okay=False, file_okay=True, resolve_path=True))
@click.argument('expression')
def cli(quiet, verbose, config_file, new_value, in_place, no_create, default_value, document, expression):
    """
    Use this tool to read or change a value in a YAML or JSON document.

    The value is found by following EXPRESSION, a path like "person.friends[5].name"
    or "['person']['friends'][5]['name']", from the top of DOCUMENT.
    """
    # First, we need to store our global options.
    global_options.\
        set_quiet(quiet).\
        set_verbose(verbose)

    if in_place and new_value is None:
        end('The --in-place option may only be used with --set.')

    try:
        configuration = Configuration.from_file(Path(config_file)) if config_file else get_configuration(Path.cwd())
        configuration.apply()

        verbose_out(f'Using {configuration}.')

        document_path = Path(document)
        content = _read_document(document_path)

        if new_value is None:
            value = get(expression, content)

            if value is ABSENT:
                if default_value is None:
                    end(f'Nothing found at "{expression}" in {document_path.name}.', rc=2)
                value = yaml.safe_load(default_value)

            out(_to_text(value), respect_quiet=False)
        else:
            create_missing = configuration.create_missing and not no_create
            content = set_value(content, expression, yaml.safe_load(new_value), create_missing)
            text = _to_text(content)

            if in_place:
                document_path.write_text(f'{text}\n', encoding='utf-8')
                out(f'Updated {document_path.name}.')
            else:
                out(text, respect_quiet=False)
    except (ValueError, yaml.YAMLError) as error:
        end(str(error))
