from continuum.cli.app import app

app(prog_name="continuum")
