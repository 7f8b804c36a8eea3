"""Core services — the ``~/.zshrc`` rewriter and the provisioning steps."""
