from __future__ import annotations

import argparse
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Callable, List, Optional
from urllib.parse import urljoin

import requests

from .accumulator import RunAccumulator
from .crawler import extract_listing_links, resolve_link, resolve_links
from .csv_writer import ensure_dir, export_path_for, export_records
from .errorlog import ErrorLog
from .errors import ExportError, RunAborted, TransportError
from .excel_writer import write_records_to_excel
from .extract import extract_record
from .fetch import create_session, fetch_html
from .types import Record, RunResult, SiteConfig


MESSAGES = {
    "en": {
        "stage_index": "[1/3] Fetching listing page {url}…",
        "found_links": "Found product links: {found}. Will process: {total}",
        "progress_ok": "[{current}/{total}] ({percent}%) Saved: {url}",
        "progress_fail": "[{current}/{total}] ({percent}%) Failed: {url}",
        "warn_failed": "[warn] {error}",
        "stage_save": "[2/3] Writing export…",
        "saved": "Export saved: {path}",
        "stage_done": "[3/3] Finalizing",
        "success": "Crawl completed. Saved products: {count}, errors logged: {failed}",
        "file": "File: {path}",
        "error": "Crawl error: {error}",
        "interrupted": "Interrupted by user",
        "help_desc": (
            "Crawl a storefront's product listing, extract every product page\n"
            "and export the results to data/<YYYY-MM-DD>.csv."
        ),
        "help_base_url": "Storefront origin (default http://shirts4mike.com/)",
        "help_listing": "Listing page path relative to the origin (default shirts.php)",
        "help_data_dir": "Output directory for exports (default data)",
        "help_log": "Error log file (default log/scraper-error.log)",
        "help_workers": "Number of product pages fetched in parallel",
        "help_timeout": "HTTP timeout per request (sec)",
        "help_ua": "Override User-Agent",
        "help_export_once": "Write the export once at the end instead of after every product",
        "help_xlsx": "Also write an Excel copy of the export",
        "help_lang": "Messages language: en or ru (default en)",
    },
    "ru": {
        "stage_index": "[1/3] Загрузка страницы каталога {url}…",
        "found_links": "Найдено ссылок на товары: {found}. Будет обработано: {total}",
        "progress_ok": "[{current}/{total}] ({percent}%) Сохранено: {url}",
        "progress_fail": "[{current}/{total}] ({percent}%) Ошибка: {url}",
        "warn_failed": "[warn] {error}",
        "stage_save": "[2/3] Сохранение выгрузки…",
        "saved": "Выгрузка сохранена: {path}",
        "stage_done": "[3/3] Готово к завершению",
        "success": "Обход завершён. Сохранено товаров: {count}, ошибок записано в журнал: {failed}",
        "file": "Файл: {path}",
        "error": "Ошибка обхода: {error}",
        "interrupted": "Прервано пользователем",
        "help_desc": (
            "Обход каталога магазина, извлечение страниц товаров\n"
            "и выгрузка результатов в data/<ГГГГ-ММ-ДД>.csv."
        ),
        "help_base_url": "Адрес магазина (по умолчанию http://shirts4mike.com/)",
        "help_listing": "Путь к странице каталога (по умолчанию shirts.php)",
        "help_data_dir": "Каталог для выгрузок (по умолчанию data)",
        "help_log": "Файл журнала ошибок (по умолчанию log/scraper-error.log)",
        "help_workers": "Количество страниц товаров, загружаемых параллельно",
        "help_timeout": "Таймаут HTTP-запроса (сек)",
        "help_ua": "Переопределить User-Agent",
        "help_export_once": "Записать выгрузку один раз в конце, а не после каждого товара",
        "help_xlsx": "Дополнительно сохранить выгрузку в Excel",
        "help_lang": "Язык сообщений: en или ru (по умолчанию en)",
    },
}


def _msg(lang: str, key: str, **kwargs) -> str:
    lang_key = lang if lang in MESSAGES else "en"
    template = MESSAGES[lang_key].get(key, "")
    return template.format(**kwargs)


def _scrape_detail(
    url: str,
    session: requests.Session,
    config: SiteConfig,
    clock: Callable[[], datetime],
) -> Record:
    url = resolve_link(config.base_url, url)
    _, html = fetch_html(url, session=session, timeout_seconds=config.timeout_seconds)
    return extract_record(url, html, base_url=config.base_url, selectors=config.selectors, now=clock())


def _export(
    records, config: SiteConfig, clock: Callable[[], datetime], error_log: ErrorLog, failures: List[Exception]
) -> Optional[str]:
    run_date = clock().date()
    try:
        path = export_records(records, run_date, data_dir=config.data_dir)
    except ExportError as exc:
        failures.append(exc)
        error_log.log(exc)
        return None

    if config.xlsx:
        # The CSV stays the run's export even when the Excel copy fails
        try:
            write_records_to_excel(records, export_path_for(config.data_dir, run_date, ext="xlsx"))
        except ExportError as exc:
            failures.append(exc)
            error_log.log(exc)
    return path


def scrape_store(
    config: Optional[SiteConfig] = None,
    session: Optional[requests.Session] = None,
    clock: Callable[[], datetime] = datetime.now,
    error_log: Optional[ErrorLog] = None,
    lang: str = "en",
) -> RunResult:
    """Crawl the listing page, extract every product page and export the results.

    Per-page failures are logged and skipped. A listing page that cannot be
    fetched is logged and raises RunAborted; no export is written in that case.
    """
    config = config or SiteConfig()
    error_log = error_log or ErrorLog(config.log_path, clock=clock)
    session = session or create_session(user_agent=config.user_agent, pool_size=config.workers)
    failures: List[Exception] = []

    try:
        ensure_dir(config.data_dir)
    except ExportError as exc:
        failures.append(exc)
        error_log.log(exc)

    index_url = urljoin(config.base_url, config.listing_path)
    print(_msg(lang, "stage_index", url=index_url), flush=True)
    try:
        _, html = fetch_html(index_url, session=session, timeout_seconds=config.timeout_seconds)
    except TransportError as exc:
        error_log.log(exc)
        raise RunAborted(exc) from exc

    hrefs = extract_listing_links(html, config.selectors)
    urls = resolve_links(config.base_url, hrefs)
    total = len(urls)
    print(_msg(lang, "found_links", found=len(hrefs), total=total), flush=True)

    accumulator = RunAccumulator()
    export_path: Optional[str] = None
    if urls:
        with ThreadPoolExecutor(max_workers=max(1, config.workers)) as executor:
            futures = {executor.submit(_scrape_detail, url, session, config, clock): url for url in urls}
            for current, future in enumerate(as_completed(futures), start=1):
                url = futures[future]
                percent = int(round(current * 100 / total))
                try:
                    record = future.result()
                except Exception as exc:
                    failures.append(exc)
                    print(_msg(lang, "progress_fail", current=current, total=total, percent=percent, url=url), flush=True)
                    print(_msg(lang, "warn_failed", error=exc), file=sys.stderr)
                    error_log.log(exc)
                    continue

                accumulator.append(record)
                print(_msg(lang, "progress_ok", current=current, total=total, percent=percent, url=url), flush=True)
                if config.export_each:
                    export_path = _export(accumulator.snapshot(), config, clock, error_log, failures)

    print(_msg(lang, "stage_save"), flush=True)
    if not config.export_each or not len(accumulator):
        export_path = _export(accumulator.snapshot(), config, clock, error_log, failures)
    if export_path:
        print(_msg(lang, "saved", path=export_path), flush=True)
    print(_msg(lang, "stage_done"), flush=True)

    return RunResult(
        records=accumulator.snapshot(),
        links_found=len(hrefs),
        failures=failures,
        export_path=export_path,
    )


def _build_arg_parser(lang: str = "en") -> argparse.ArgumentParser:
    loc = MESSAGES.get(lang, MESSAGES["en"])
    defaults = SiteConfig()
    p = argparse.ArgumentParser(
        prog="shopcrawl",
        description=loc["help_desc"],
    )
    p.add_argument("--base-url", dest="base_url", default=defaults.base_url, help=loc["help_base_url"])
    p.add_argument("--listing-path", dest="listing_path", default=defaults.listing_path, help=loc["help_listing"])
    p.add_argument("--data-dir", dest="data_dir", default=defaults.data_dir, help=loc["help_data_dir"])
    p.add_argument("--log-file", dest="log_path", default=defaults.log_path, help=loc["help_log"])
    p.add_argument(
        "-w",
        "--workers",
        dest="workers",
        type=int,
        default=defaults.workers,
        help=loc["help_workers"],
    )
    p.add_argument(
        "--timeout",
        dest="timeout_seconds",
        type=float,
        default=defaults.timeout_seconds,
        help=loc["help_timeout"],
    )
    p.add_argument(
        "-H",
        "--user-agent",
        dest="user_agent",
        default=None,
        help=loc["help_ua"],
    )
    p.add_argument("--export-once", dest="export_once", action="store_true", help=loc["help_export_once"])
    p.add_argument("--xlsx", dest="xlsx", action="store_true", help=loc["help_xlsx"])
    p.add_argument(
        "--lang",
        dest="lang",
        choices=["en", "ru"],
        default=lang,
        help=loc["help_lang"],
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_arg_parser("en")
    args = parser.parse_args(argv)
    lang = args.lang
    config = SiteConfig(
        base_url=args.base_url,
        listing_path=args.listing_path,
        data_dir=args.data_dir,
        log_path=args.log_path,
        workers=args.workers,
        timeout_seconds=args.timeout_seconds,
        user_agent=args.user_agent,
        export_each=not args.export_once,
        xlsx=args.xlsx,
    )
    try:
        result = scrape_store(config, lang=lang)
    except KeyboardInterrupt:
        print(_msg(lang, "interrupted"), file=sys.stderr)
        return 130
    except RunAborted as exc:
        print(_msg(lang, "error", error=exc), file=sys.stderr)
        return 1

    print(_msg(lang, "success", count=len(result.records), failed=len(result.failures)))
    if result.export_path:
        print(_msg(lang, "file", path=result.export_path))
    return 0
