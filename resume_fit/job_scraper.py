"""
Job Posting Scraper Module.

Renders a job posting in a headless Chrome session (Selenium) and extracts
the description text using site-specific selectors for known job boards,
falling back to generic content landmarks.

! Many job boards gate postings behind a login. Pages that look like an
! auth or captcha wall are rejected so the user can paste the text instead.
"""

import logging
import re
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional
from urllib.parse import urlparse

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

from resume_fit.config import ScraperSettings
from resume_fit.exceptions import (
    AuthWallDetected,
    ExtractionTooShort,
    JobScrapeError,
    NavigationTimeout,
)
from resume_fit.normalization import clean_scraped_text

# * Browser identity
VIEWPORT_WIDTH = 1920
VIEWPORT_HEIGHT = 1080
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
EXTRA_HEADERS = {
    "Accept-Language": "en-US,en;q=0.9",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
}

MIN_CONTENT_LENGTH = 50
AUTH_WALL_WINDOW = 500
AUTH_WALL_PATTERN = re.compile(r"sign in|sign up|join now|account|login|captcha", re.IGNORECASE)

# * Hand-tuned selectors per job board, keyed by hostname fragment
SITE_SELECTORS = {
    "linkedin.com": [
        ".jobs-description__content",
        ".jobs-description",
        ".description__text",
        '[class*="job-description"]',
        '[class*="jobs-description"]',
        ".show-more-less-html",
    ],
    "naukri.com": [
        ".jd-container",
        ".job-description",
        '[class*="job-desc"]',
        '[class*="jd-"]',
    ],
    "glassdoor.com": [
        ".jobDescriptionContent",
        '[class*="JobDetails"]',
        '[data-test="jobDescriptionContent"]',
        ".desc",
    ],
    "indeed.com": [
        "#jobDescriptionText",
        ".jobsearch-jobDescriptionText",
        '[class*="jobsearch-JobComponent-description"]',
    ],
    "monster.com": [
        ".job-description",
        "#JobDescription",
        '[class*="job-desc"]',
    ],
    "dice.com": [
        "#jobdescSec",
        ".job-description",
        '[class*="job-description"]',
    ],
}

GENERIC_SELECTORS = [
    "main",
    '[role="main"]',
    ".job-description",
    ".job-details",
    "#job-description",
    "#jobDescription",
    '[class*="job-desc"]',
    '[class*="description"]',
    "article",
]

# * Runs in the page; arguments[0] is the selector list
EXTRACTION_SCRIPT = """
const selectors = arguments[0];
const renderedText = (el) => el.innerText || el.textContent || '';

document
  .querySelectorAll('script, style, nav, header, footer, [role="navigation"], [role="banner"]')
  .forEach((el) => el.remove());

for (const selector of selectors) {
  const element = document.querySelector(selector);
  if (element && (element.textContent || '').trim().length > 100) {
    return {text: renderedText(element), selectorUsed: selector, source: 'selector'};
  }
}

let maxLength = 0;
let best = null;
document.querySelectorAll('div, section').forEach((node) => {
  const length = (node.textContent || '').trim().length;
  if (length > maxLength && length > 200 && length < 50000) {
    maxLength = length;
    best = node;
  }
});

if (best) {
  return {text: renderedText(best), selectorUsed: 'largest-block', source: 'largest-block'};
}

return {
  text: document.body ? renderedText(document.body) : '',
  selectorUsed: 'body',
  source: 'body',
};
"""

logger = logging.getLogger("resume_fit.scraper")


def get_site_selectors(url: str) -> list[str]:
    """
    Get candidate description selectors for a job posting URL.

    Args:
        url: Job posting URL.

    Returns:
        Site-specific selectors for known job boards, generic ones otherwise.
    """
    hostname = (urlparse(url).hostname or "").lower()

    for domain, selectors in SITE_SELECTORS.items():
        if domain in hostname:
            return list(selectors)

    return list(GENERIC_SELECTORS)


def looks_like_auth_wall(text: str) -> bool:
    """Check whether the leading text suggests a login or captcha gate."""
    return bool(AUTH_WALL_PATTERN.search(text[:AUTH_WALL_WINDOW]))


def create_chrome_driver(settings: ScraperSettings) -> webdriver.Chrome:
    """Launch a Chrome WebDriver configured to look like a desktop browser."""
    options = Options()

    if settings.headless:
        options.add_argument("--headless=new")

    # * Sandboxing disabled for containerized hosts
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-setuid-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-blink-features=AutomationControlled")
    options.add_argument(f"--window-size={VIEWPORT_WIDTH},{VIEWPORT_HEIGHT}")
    options.add_argument(f"user-agent={USER_AGENT}")

    # * Return from get() once the DOM content has loaded
    options.page_load_strategy = "eager"

    options.add_experimental_option("excludeSwitches", ["enable-automation"])
    options.add_experimental_option("useAutomationExtension", False)

    service = Service(ChromeDriverManager().install())
    driver = webdriver.Chrome(service=service, options=options)

    try:
        driver.execute_cdp_cmd("Network.enable", {})
        driver.execute_cdp_cmd("Network.setExtraHTTPHeaders", {"headers": EXTRA_HEADERS})
        driver.set_page_load_timeout(settings.navigation_timeout)
    except WebDriverException:
        driver.quit()
        raise

    return driver


class JobPageFetcher:
    """
    Fetches job description text from a posting URL.

    A fresh browser is launched for every fetch and always closed before
    returning, whether the fetch succeeds or fails.
    """

    def __init__(
        self,
        settings: Optional[ScraperSettings] = None,
        driver_factory: Optional[Callable[[ScraperSettings], webdriver.Chrome]] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            settings: Browser and timeout settings.
            driver_factory: Callable that launches a WebDriver for the settings.
        """
        self.settings = settings or ScraperSettings()
        self.driver_factory = driver_factory or create_chrome_driver

    @contextmanager
    def browser(self) -> Iterator[webdriver.Chrome]:
        """Launch a browser and guarantee it is closed afterwards."""
        driver = self.driver_factory(self.settings)
        try:
            yield driver
        finally:
            try:
                driver.quit()
            except WebDriverException as e:
                logger.warning("Browser close failed: %s", e)

    def fetch(self, url: str) -> str:
        """
        Scrape the job description text from a URL.

        Args:
            url: Job posting URL.

        Returns:
            Cleaned description text.

        Raises:
            NavigationTimeout: If the page does not load in time or is unreachable.
            ExtractionTooShort: If fewer than 50 characters were extracted.
            AuthWallDetected: If the page looks like a login or captcha wall.
            JobScrapeError: For any other browser failure.
        """
        selectors = get_site_selectors(url)

        try:
            with self.browser() as driver:
                self._navigate(driver, url)
                self._wait_for_content(driver, selectors)

                if self.settings.settle_delay:
                    # * Small extra delay for client-side hydration
                    time.sleep(self.settings.settle_delay)

                result = driver.execute_script(EXTRACTION_SCRIPT, selectors) or {}
        except JobScrapeError:
            raise
        except WebDriverException as e:
            raise JobScrapeError(f"Failed to scrape job description: {e.msg or e}", url) from e
        except Exception as e:
            # * Driver download or launch failures outside Selenium
            raise JobScrapeError(f"Failed to scrape job description: {e}", url) from e

        cleaned = clean_scraped_text(result.get("text") or "")
        auth_wall = looks_like_auth_wall(cleaned)

        logger.info(
            "Job scraped url=%s selector=%s source=%s length=%s auth_wall=%s preview=%r",
            url,
            result.get("selectorUsed", "unknown"),
            result.get("source", "unknown"),
            len(cleaned),
            auth_wall,
            cleaned[:160],
        )

        if len(cleaned) < MIN_CONTENT_LENGTH:
            raise ExtractionTooShort(url, len(cleaned))

        if auth_wall:
            raise AuthWallDetected(url)

        return cleaned

    def _navigate(self, driver: webdriver.Chrome, url: str) -> None:
        """Open the URL, mapping load failures to NavigationTimeout."""
        try:
            driver.get(url)
        except TimeoutException as e:
            raise NavigationTimeout(url) from e
        except WebDriverException as e:
            # * net::ERR_* covers DNS, connection and TLS failures
            if "net::" in (e.msg or ""):
                raise NavigationTimeout(url) from e
            raise

    def _wait_for_content(self, driver: webdriver.Chrome, selectors: list[str]) -> Optional[str]:
        """Wait for the first candidate selector to appear (best effort)."""
        for selector in selectors:
            try:
                WebDriverWait(driver, self.settings.selector_timeout).until(
                    EC.presence_of_element_located((By.CSS_SELECTOR, selector))
                )
                return selector
            except TimeoutException:
                continue

        logger.debug("No candidate selector appeared selectors=%s", len(selectors))
        return None
