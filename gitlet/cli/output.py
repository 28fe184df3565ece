"""CLI output utilities and formatting."""

import click
from colorama import Fore, Style

BANNER = f"""
{Fore.YELLOW}+------------------------------------------+{Style.RESET_ALL}
{Fore.YELLOW}|{Style.RESET_ALL}   {Fore.CYAN}{Style.BRIGHT}gitlet{Style.RESET_ALL}                                 {Fore.YELLOW}|{Style.RESET_ALL}
{Fore.YELLOW}|{Style.RESET_ALL}   {Fore.WHITE}A small, local version control system{Style.RESET_ALL}  {Fore.YELLOW}|{Style.RESET_ALL}
{Fore.YELLOW}+------------------------------------------+{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def fail(message) -> None:
    """Report an error on stderr and exit with status 1."""
    click.echo(error(str(message)), err=True)
    raise click.exceptions.Exit(1)
