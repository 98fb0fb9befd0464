# emacs: -*- mode: python-mode; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the neuroformats package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Package-wide logging defaults

``logger`` is the logger used by all codecs for advisory messages, such as a
color table whose two entry counts disagree, or an annotation written without
a color table.

To change which messages appear, set the level as for any python logger, e.g.
``logger.setLevel(logging.ERROR)`` to hide warnings.  As for most loggers, if
``logger.level == 0`` then a default log level is used - use
``logger.getEffectiveLevel()`` to see what that default is.
"""
import logging

logger = logging.getLogger('neuroformats.global')
logger.addHandler(logging.StreamHandler())


class LoggingOutputSuppressor:
    """Context manager to prevent global logger from printing"""

    def __enter__(self):
        self.orig_handlers = list(logger.handlers)
        for handler in self.orig_handlers:
            logger.removeHandler(handler)

    def __exit__(self, exc, value, tb):
        for handler in self.orig_handlers:
            logger.addHandler(handler)
