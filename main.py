#!/usr/bin/env python3
"""
PageInsight Crawler
Extracts page fields, data quality scores and content analytics from a list of URLs
"""

import argparse
import asyncio
import logging
import sys
from pageinsight.config import load_input, resolve_storage_dir
from pageinsight.crawler import CrawlerBuilder
from pageinsight.errors import ConfigurationError
from pageinsight.models import SCRAPER_NAME
from pageinsight.monitoring import LogManager

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Extract page insights from a list of URLs")
    parser.add_argument('--input', help="Path to the input JSON (default: $PAGEINSIGHT_INPUT or "
                                        "<storage>/key_value_stores/default/INPUT.json)")
    parser.add_argument('--storage-dir', help="Storage root (default: $PAGEINSIGHT_STORAGE_DIR or ./storage)")
    parser.add_argument('--log-level', default='INFO')
    return parser.parse_args(argv)


async def main(argv=None):
    """Main entry point for the crawler"""
    args = parse_args(argv)
    storage_dir = resolve_storage_dir(args.storage_dir)
    log_manager = LogManager(log_dir=str(storage_dir / 'logs'), log_level=args.log_level)

    logger.info(f"🚀 Starting {SCRAPER_NAME}")

    crawler_input = load_input(args.input, storage_dir).validate()
    logger.info(f"📊 Configuration: {len(crawler_input.start_urls)} URLs, max {crawler_input.max_items} items")

    crawler = (CrawlerBuilder.from_input(crawler_input, storage_dir)
               .with_log_manager(log_manager)
               .build())

    return await crawler.run()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n🛑 Crawler stopped by user")
        sys.exit(130)
    except ConfigurationError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
