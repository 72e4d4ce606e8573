"""Main script for running the truth engine from a terminal."""

import asyncio
import logging
import sys

from rich import print
from rich.markup import escape

from .domain.models.verification_run import RunStatus, VerificationRun
from .infrastructure.dependencies import ServiceContainer
from .infrastructure.settings import get_settings


def print_run(run: VerificationRun) -> None:
    """Print a finished run."""
    color = "green" if run.status == RunStatus.COMPLETED else "red"
    print(f"\n[bold {color}]Status:[/bold {color}] {run.status.value}")
    if run.error:
        print(f"[red]Error:[/red] {escape(run.error)}")
    if run.ledger_verified:
        print("[blue]Result served from the verification cache[/blue]")

    print(f"\n[bold]Claims ({len(run.claims)}):[/bold]")
    for i, claim in enumerate(run.claims, 1):
        print(f"{i}. {escape(claim.claim_text)}")

    if run.results:
        print("\n[bold yellow]Corrections:[/bold yellow]")
        for result in run.results:
            print(f"- [bold]{result.status.value}[/bold] {escape(result.claim)}")
            print(f"  → {escape(result.verified_value)} ({escape(result.source)}, trust {result.trust_score})")

    print(f"\n[bold]Trust score:[/bold] {run.trust_score}")
    print("\n[bold blue]Verified content:[/bold blue]")
    print(escape(run.verified_content))


async def main(argv=None):
    """Run the truth engine on arguments, or interactively without any."""
    argv = sys.argv[1:] if argv is None else argv
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print("[bold]Truth Engine[/bold] - claim verification against web evidence")
    print("-----------------------------------------------------------")

    container = ServiceContainer(settings)
    await container.startup()
    service = container.get_verification_service()

    try:
        if argv:
            print_run(await service.verify(" ".join(argv)))
            return

        while True:
            content = input("\nEnter text to verify (or 'quit' to exit): ")
            if content.lower() in ('quit', 'exit', 'q'):
                break
            if not content.strip():
                continue

            print("\nVerifying...")
            try:
                print_run(await service.verify(content))
            except Exception as e:
                print(f"\n[red]Error verifying content: {escape(str(e))}[/red]")

    finally:
        await container.shutdown()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        pass


if __name__ == "__main__":
    run()
