# pylint: disable=line-too-long, invalid-name

'''
Decode a PDF register into positioned text elements, one list of elements per page.

pdfplumber reports words with x0 (left), x1 (right), top and bottom in page co-ordinates
(origin at the top left). Blank characters are kept, so a run of text such as
"Property Address:" arrives as one element.
'''

import logging
import contextlib
from io import BytesIO
import pdfplumber
from geometry import Element


def wordToElement(word):
    '''
Convert a pdfplumber word into an Element
    '''
    return Element(word['text'], word['x0'], word['top'], word['x1'] - word['x0'], word['bottom'] - word['top'])


@contextlib.contextmanager
def readPdfPages(buffer):
    '''
Open the PDF in buffer and yield an iterator of pages, each page a list of Elements.
The document is closed when the with block ends; each page is closed once its elements have been read.
    '''

    with pdfplumber.open(BytesIO(buffer)) as pdf:
        logging.info('The PDF has %d page(s)', len(pdf.pages))

        def pages():
            for page in pdf.pages:
                try:
                    words = page.extract_words(keep_blank_chars=True)
                    yield [wordToElement(word) for word in words]
                finally:
                    page.close()

        yield pages()
