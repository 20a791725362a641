from boardeval import create_app

app = create_app()
