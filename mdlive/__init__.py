"""mdlive — live markdown annotation and list continuation for plain-text editors."""

from loguru import logger

__version__ = "0.1.0"

# Library logging stays silent until a host opts in with logger.enable("mdlive").
logger.disable("mdlive")
