import os
from ellarises import create_app

app = create_app()

if __name__ == '__main__':
    app.run(host=os.environ.get('HOST', '0.0.0.0'), port=app.config['PORT'], debug=app.config.get('DEBUG', False))
