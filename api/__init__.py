from api.app import create_app
