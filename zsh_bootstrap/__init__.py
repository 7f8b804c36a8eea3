"""zsh-bootstrap — provision an interactive zsh environment."""

__version__ = "0.1.0"
