"""Komendy CLI: każdy moduł udostępnia add_parser(subparsers) i run(args)."""
