# pylint: disable=line-too-long, invalid-name

'''
Store development applications in the "data" table.
An application is only inserted if its application number (council_reference) isn't already there,
so re-running the scraper over the same registers never creates duplicates.
'''

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
import defineSQLAlchemyDB as dbConfig


def initializeDatabase(connectionString, **kwargs):
    '''
Create the engine and any missing tables
    '''
    engine = create_engine(connectionString, **kwargs)
    dbConfig.Base.metadata.create_all(engine)
    return engine


def insertRow(engine, developmentApplication):
    '''
Insert the development application, unless it already exists.
Returns True if inserted. SQLAlchemyError is raised if the database fails.
    '''
    with Session(engine) as session:
        if session.get(dbConfig.DATA, developmentApplication.applicationNumber) is not None:
            logging.info('    Skipped: application "%s" with address "%s", description "%s" and received date "%s" because it was already present in the database.',
                         developmentApplication.applicationNumber, developmentApplication.address, developmentApplication.description, developmentApplication.receivedDate)
            return False
        session.add(dbConfig.DATA(council_reference=developmentApplication.applicationNumber,
                                  address=developmentApplication.address,
                                  description=developmentApplication.description,
                                  info_url=developmentApplication.informationUrl,
                                  comment_url=developmentApplication.commentUrl,
                                  date_scraped=developmentApplication.scrapeDate,
                                  date_received=developmentApplication.receivedDate))
        session.commit()
    logging.info('    Inserted: application "%s" with address "%s", description "%s" and received date "%s" into the database.',
                 developmentApplication.applicationNumber, developmentApplication.address, developmentApplication.description, developmentApplication.receivedDate)
    return True
