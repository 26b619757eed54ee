#!/usr/bin/env python3
"""
Basic page insight example
Extracts fields, quality scores and analytics for a short URL list
"""

import asyncio
import sys
import os

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pageinsight.crawler import CrawlerBuilder
from pageinsight.storage import Dataset


async def main():
    print("🌿 Basic Page Insight Example")
    print("="*50)

    start_urls = [
        'https://example.com',
        'https://httpbin.org/html',
        'https://example.com/',       # Same as the first URL, skipped
    ]

    crawler = (CrawlerBuilder(start_urls)
               .max_concurrency(2)
               .with_quality_check()
               .with_analytics()
               .storage_dir('example_storage')
               .build())

    report = await crawler.run()

    for item in Dataset('example_storage').get_items():
        if item.get('error'):
            print(f"❌ {item['url']}: {item['errorMessage']}")
        else:
            print(f"✅ {item['url']}: quality {item['dataQuality']['overall']:.2f}, "
                  f"{item['analytics']['readingTime']} min read")

    print(f"\n📊 Failure rate: {report.failure_rate:.1f}%")


if __name__ == "__main__":
    asyncio.run(main())
