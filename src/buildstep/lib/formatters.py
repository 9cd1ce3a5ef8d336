"""
Argument parser formatting helpers.

Classes
-------
CapitalizedHelpFormatter : Custom argparse formatter with capitalized section titles
StepArgumentParser : ArgumentParser that raises ValidationError instead of exiting
"""

import argparse

from buildstep.exceptions import ValidationError


class CapitalizedHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """
    Custom help formatter that capitalizes section titles.

    Extends RawDescriptionHelpFormatter to:
    - Capitalize "usage:" to "Usage:"
    - Add newline after usage for better readability
    - Preserve raw formatting for description text
    """

    def add_usage(self, usage, actions, groups, prefix=None):
        if prefix is None:
            prefix = "Usage:\n  "
        return super().add_usage(usage, actions, groups, prefix)


class StepArgumentParser(argparse.ArgumentParser):
    """
    Argument parser that reports usage errors as ValidationError.

    Plain argparse exits with status 2 on malformed arguments, and status 2
    is reserved for build failures here.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("formatter_class", CapitalizedHelpFormatter)
        super().__init__(*args, **kwargs)
        self._optionals.title = "Options"

    def error(self, message):
        raise ValidationError(message)
