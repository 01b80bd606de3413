# cli.py
import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.markup import escape
from rich import box

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog_sdk.browser import CatalogBrowser
from catalog_sdk.client import AsyncCatalogClient, CatalogClient
from catalog_sdk.config import settings
from catalog_sdk.errors import CatalogError, FilterError
from catalog_sdk.images import ImageHostPolicy
from catalog_sdk.links import ProductDetail, product_link
from catalog_sdk.models import Product
from catalog_sdk.navigation import BrowserHistory

console = Console()

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def product_table(products: Sequence[Product], images: Optional[ImageHostPolicy] = None,
                  title: str = "📦 Products Catalog") -> Table:
    # Product text comes from the API; escape it so it is shown, never interpreted.
    images = images or ImageHostPolicy(settings.image_hosts)
    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("SKU", style="dim", width=12)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Category", width=14)
    table.add_column("Subcategory", width=14)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Image", width=8)
    table.add_column("Link", width=22)

    for p in products:
        image = "yes" if images.resolve(p.image_url) else "[dim]-[/dim]"
        table.add_row(
            escape(p.sku),
            escape(p.name),
            escape(p.category),
            escape(p.subcategory),
            f"${p.price_cents / 100:.2f}",
            image,
            escape(product_link(p)),
        )
    return table


def show_products(products: Sequence[Product], images: Optional[ImageHostPolicy] = None):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return
    console.print(product_table(products, images))


def show_detail(detail: ProductDetail, images: Optional[ImageHostPolicy] = None):
    if not detail.found:
        style = "yellow" if detail.status == "not_found" else "red"
        console.print(Panel.fit(f"[{style}]{escape(detail.message or detail.status)}[/{style}]",
                                title=f"🔍 {escape(detail.sku or 'no sku')}"))
        return
    p = detail.product
    images = images or ImageHostPolicy(settings.image_hosts)
    image = images.resolve(p.image_url)
    body = (
        f"[bold]{escape(p.name)}[/bold]\n"
        f"{escape(p.category)} / {escape(p.subcategory)}\n"
        f"Price: [green]${p.price_cents / 100:.2f}[/green]\n"
        f"Image: {escape(image) if image else '[dim]omitted[/dim]'}\n\n"
        f"{escape(p.description or '')}"
    )
    console.print(Panel(body, title=f"ℹ️ {escape(p.sku)}", border_style="cyan"))


def page_header(browser: CatalogBrowser) -> Panel:
    category, subcategory = browser.filters.labels()
    search = browser.search.debounced_text
    header = Table.grid(padding=(0, 2))
    header.add_column(style="bold cyan")
    header.add_column()
    header.add_row("Category", escape(category))
    header.add_row("Subcategory", escape(subcategory))
    header.add_row("Search", escape(search) if search else "[dim]none[/dim]")
    header.add_row("Page", f"{browser.pages.current_page} of {browser.pages.total_pages} "
                           f"({browser.total} products)")
    if browser.error:
        header.add_row("[red]Error[/red]", escape(browser.error))
    return Panel(header, title="🛍️ Catalog", border_style="blue")


def show_page(browser: CatalogBrowser):
    console.print(page_header(browser))
    show_products(browser.items, browser.images)


# ---------------------------
# Interactive browser
# ---------------------------
MENU = [
    ("c", "🏷️ Category", "n", "➡️ Next page"),
    ("s", "🗂️ Subcategory", "p", "⬅️ Previous page"),
    ("/", "🔍 Search", "o", "ℹ️ Open product"),
    ("x", "🧹 Clear filters", "g", "🔢 Go to page"),
    ("", "", "q", "👋 Quit"),
]


async def _ask(session: PromptSession, message: str, words: Optional[List[str]] = None) -> str:
    completer = WordCompleter(words, ignore_case=True) if words else None
    return (await session.prompt_async(f"{message} ", completer=completer, style=custom_style)).strip()


async def browse(api_url: str, location: str = "/"):
    session = PromptSession()
    async with AsyncCatalogClient(api_url, timeout=settings.timeout) as client:
        browser = CatalogBrowser(client, history=BrowserHistory(location))
        await browser.mount()

        while True:
            console.rule(style="dim")
            show_page(browser)
            menu_table = Table.grid(padding=(0, 2))
            for _ in range(2):
                menu_table.add_column("Key", style="bold cyan", width=4)
                menu_table.add_column("Option", width=22)
            for row in MENU:
                menu_table.add_row(*row)
            console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

            choice = await _ask(session, "\nChoose an option", [key for row in MENU for key in (row[0], row[2]) if key])

            try:
                if choice == "c":
                    value = await _ask(session, "Category (blank for all)", browser.categories)
                    await browser.select_category(value)
                elif choice == "s":
                    if not browser.filters.category:
                        console.print("[yellow]Choose a category first[/yellow]")
                        continue
                    value = await _ask(session, "Subcategory (blank for all)", browser.filters.subcategory_options)
                    await browser.select_subcategory(value)
                elif choice == "/":
                    text = await _ask(session, "Search")
                    with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"),
                                  transient=True) as progress:
                        progress.add_task(description="Searching...", total=None)
                        await browser.submit_search(text)
                elif choice == "n":
                    if not await browser.next_page():
                        console.print("[dim]Already on the last page[/dim]")
                elif choice == "p":
                    if not await browser.prev_page():
                        console.print("[dim]Already on the first page[/dim]")
                elif choice == "o":
                    sku = await _ask(session, "SKU", [p.sku for p in browser.items])
                    if not sku:
                        console.print("[yellow]No product selected[/yellow]")
                        continue
                    show_detail(await browser.open_product({"sku": sku}), browser.images)
                    browser.history.back()
                elif choice == "g":
                    raw = await _ask(session, f"Page (1-{browser.pages.total_pages})")
                    try:
                        page = int(raw)
                    except ValueError:
                        console.print("[red]Please enter a page number.[/red]")
                        continue
                    if not await browser.go_to_page(page):
                        console.print(f"[dim]Staying on page {browser.pages.current_page}[/dim]")
                elif choice == "x":
                    await browser.clear_filters()
                elif choice.lower() in ("q", "quit", "exit"):
                    console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                    return
            except FilterError as e:
                console.print(f"[red]{escape(str(e))}[/red]")


# ---------------------------
# One-shot commands
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product catalog browser")
    parser.add_argument("--api-url", default=settings.api_url, help="Catalog API base URL")
    subparsers = parser.add_subparsers(dest="command")

    sv = subparsers.add_parser("serve", help="Run the in-memory catalog API")
    sv.add_argument("--host", default="127.0.0.1")
    sv.add_argument("--port", type=int, default=8085)

    lp = subparsers.add_parser("products", help="List one page of products")
    lp.add_argument("--category")
    lp.add_argument("--subcategory")
    lp.add_argument("--search")
    lp.add_argument("--page", type=int, default=1)

    subparsers.add_parser("categories", help="List categories")

    sc = subparsers.add_parser("subcategories", help="List subcategories of a category")
    sc.add_argument("--category", required=True)

    gp = subparsers.add_parser("product", help="Show a product by SKU")
    gp.add_argument("--sku", required=True)

    br = subparsers.add_parser("browse", help="Interactive catalog browser")
    br.add_argument("--location", default="/", help="Start URL, e.g. '/?page=2'")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.getLevelName(settings.log_level.upper()),
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    command = args.command or "browse"

    if command == "serve":
        import uvicorn
        uvicorn.run("catalog_api.main:app", host=args.host, port=args.port)
        return 0

    if command == "browse":
        asyncio.run(browse(args.api_url, getattr(args, "location", "/")))
        return 0

    c = CatalogClient(base_url=args.api_url, timeout=settings.timeout)
    try:
        if command == "products":
            page = max(args.page, 1)
            result = c.list_products(args.category, args.subcategory, args.search,
                                     limit=settings.page_size, offset=(page - 1) * settings.page_size)
            show_products(result.items)
            console.print(f"[dim]{result.total} products[/dim]")
        elif command == "categories":
            for name in c.list_categories():
                console.print(escape(name))
        elif command == "subcategories":
            for name in c.list_subcategories(args.category):
                console.print(escape(name))
        elif command == "product":
            try:
                show_detail(ProductDetail(status="found", sku=args.sku, product=c.get_product(args.sku)))
            except CatalogError as e:
                status = "not_found" if e.status_code == 404 else "error"
                show_detail(ProductDetail(status=status, sku=args.sku, message=str(e)))
    except CatalogError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
