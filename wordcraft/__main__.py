import logging

import uvicorn

from . import config

def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    uvicorn.run('wordcraft.main:application', host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())

if __name__ == '__main__':
    main()
