from mdcontent.cli.cli import app


__all__ = ["app"]
