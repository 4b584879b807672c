# pylint: disable=line-too-long, invalid-name

'''
The records that flow from a parsed PDF page through to the database.

A RawApplication is what was read from one page - its address is not yet reconciled.
The address is either a FreeTextAddress (old format registers, one line of text)
or a MultiplexedAddress (new format registers, separate house number, street and suburb
fields, any of which may hold several addresses separated by MULTIPLEX_DELIMITER).

A DevelopmentApplication is the reconciled record, ready to be stored.
Its application number is the primary key.
'''

import collections


MULTIPLEX_DELIMITER = 'ü'
NO_DESCRIPTION = 'No description provided'

FreeTextAddress = collections.namedtuple('FreeTextAddress', ['text'])
MultiplexedAddress = collections.namedtuple('MultiplexedAddress', ['houseNumber', 'streetName', 'suburbName'])

RawApplication = collections.namedtuple('RawApplication',
                                        ['applicationNumber', 'address', 'description', 'informationUrl', 'receivedDate'])

DevelopmentApplication = collections.namedtuple('DevelopmentApplication',
                                                ['applicationNumber', 'address', 'description', 'informationUrl',
                                                 'commentUrl', 'scrapeDate', 'receivedDate'])
