"""
Скрипт для извлечения описания страницы или элемента из запущенного браузера
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from page_cloner.dom_processing.manager import PageCloneService
from page_cloner.dom_processing.models import ExtractionOptions
from page_cloner.exceptions import PageClonerError
from page_cloner.logging_config import setup_logging
from page_cloner.session.browser_connection import BrowserConnection

load_dotenv()


async def run_cloner(
    cdp_url: str | None,
    target_id: str | None,
    selector: str | None,
    options: ExtractionOptions,
) -> dict:
    """Подключиться к браузеру и извлечь страницу или один элемент"""
    async with BrowserConnection(cdp_url) as connection:
        page = await connection.get_page(target_id)
        service = PageCloneService(page, style_context_factory=connection.create_style_context, options=options)

        if selector:
            result = await service.clone_element(selector)
        else:
            result = await service.clone_page()
        return result.to_dict()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Извлечение компактного описания страницы с подсказками utility-классов",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:
  python run_cloner.py
  python run_cloner.py --cdp-url http://localhost:9222 --output page.json
  python run_cloner.py --selector "main .card" --placeholders
  python run_cloner.py --max-depth 8 --no-pseudo
        """
    )

    parser.add_argument("--cdp-url", type=str, default=None, help="Адрес CDP браузера (по умолчанию PAGE_CLONER_CDP_URL)")
    parser.add_argument("--target-id", type=str, default=None, help="ID вкладки (по умолчанию первая обычная страница)")
    parser.add_argument("--selector", "-s", type=str, default=None, help="CSS-селектор элемента вместо всей страницы")
    parser.add_argument("--max-depth", type=int, default=None, help="Максимальная глубина обхода (0 - без ограничения)")
    parser.add_argument("--no-css", action="store_true", help="Не извлекать стили и классы")
    parser.add_argument("--placeholders", action="store_true", help="Заменять src картинок на placeholder://WxH")
    parser.add_argument("--no-components", action="store_true", help="Не искать имена React-компонентов")
    parser.add_argument("--no-pseudo", action="store_true", help="Не извлекать ::before/::after")
    parser.add_argument("--output", "-o", type=str, default=None, help="Файл для JSON (по умолчанию stdout)")
    return parser


def options_from_args(args: argparse.Namespace) -> ExtractionOptions:
    return ExtractionOptions.from_config(
        max_depth=args.max_depth,
        extract_css=False if args.no_css else None,
        use_placeholders=True if args.placeholders else None,
        detect_components=False if args.no_components else None,
        extract_pseudo_elements=False if args.no_pseudo else None,
    )


def main():
    """Главная функция"""
    args = build_parser().parse_args()

    # JSON уходит в stdout, логи в stderr
    if not args.output:
        setup_logging(stream=sys.stderr, force_setup=True)

    try:
        document = asyncio.run(run_cloner(args.cdp_url, args.target_id, args.selector, options_from_args(args)))
    except KeyboardInterrupt:
        print("\n\n👋 Выход из программы...\n")
        sys.exit(0)
    except PageClonerError as e:
        print(f"\n❌ {e}\n", file=sys.stderr)
        sys.exit(1)

    output = json.dumps(document, ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(output, encoding='utf-8')
        print(f"\n✅ Результат сохранен в: {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
