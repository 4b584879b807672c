# pylint: disable=line-too-long, invalid-name

'''
Fetch the council's development application pages and find the links to the PDF registers.

The listing page links to one page per year ("2019 Development Register" etc.)
and each year page links to the PDF registers for that year.
Transient server errors (429, 5xx) are retried with back off before an exception is raised.
'''

import os
import time
import random
import logging
from urllib.parse import urljoin
import requests
from requests.adapters import HTTPAdapter, Retry
from bs4 import BeautifulSoup


LINK_SELECTOR = 'div.unityHtmlArticle p a'
YEAR_PAGE_MARKER = 'register'
PDF_MARKER = '.pdf'
PROXY_VARIABLE = 'MORPH_PROXY'
REQUEST_TIMEOUT = 60
MINIMUM_DELAY = 2               # seconds between requests
EXTRA_DELAY_CHOICES = 5         # plus 0 to 4 (random, whole) seconds


def createSession():
    '''
A requests Session that retries transient errors and uses the MORPH_PROXY proxy (if defined)
    '''
    session = requests.Session()
    retries = Retry(total=4, backoff_factor=0.5, status_forcelist=[429, 500, 502, 503, 504])
    adapter = HTTPAdapter(max_retries=retries)
    session.mount('https://', adapter)
    session.mount('http://', adapter)
    proxy = os.environ.get(PROXY_VARIABLE)
    if proxy:
        logging.info('Using the proxy %s', proxy)
        session.proxies.update({'http': proxy, 'https': proxy})
    return session


def fetchUrl(session, url):
    '''
Return the body of url as bytes. requests.RequestException is raised on failure
    '''
    logging.info('Retrieving: %s', url)
    response = session.get(url, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response.content


def findLinks(body, baseUrl, selector=LINK_SELECTOR):
    '''
Return (absolute url, link text) for every anchor matching selector
    '''
    soup = BeautifulSoup(body, 'html.parser')
    links = []
    for anchor in soup.select(selector):
        href = anchor.get('href')
        if not href:
            continue
        links.append((urljoin(baseUrl, href.strip()), anchor.get_text(' ', strip=True)))
    return links


def uniqueUrls(urls):
    seen = set()
    unique = []
    for url in urls:
        if url not in seen:
            seen.add(url)
            unique.append(url)
    return unique


def findYearPageUrls(body, baseUrl, selector=LINK_SELECTOR):
    '''
The links to the yearly register pages (the link text contains "register")
    '''
    return uniqueUrls([url for url, linkText in findLinks(body, baseUrl, selector) if YEAR_PAGE_MARKER in linkText.lower()])


def findPdfUrls(body, baseUrl, selector=LINK_SELECTOR):
    '''
The links to PDF registers on a year page (the link text contains "register" and the url ".pdf")
    '''
    return uniqueUrls([url for url, linkText in findLinks(body, baseUrl, selector)
                       if (YEAR_PAGE_MARKER in linkText.lower()) and (PDF_MARKER in url.lower())])


def politeSleep():
    '''
Pause between requests so as not to overload the council's web server
    '''
    delay = MINIMUM_DELAY + random.randrange(EXTRA_DELAY_CHOICES)
    logging.debug('Sleeping for %d seconds', delay)
    time.sleep(delay)
