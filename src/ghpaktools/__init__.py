import typer

from ghpaktools import pak

app = typer.Typer(help="Collection of tools for Neversoft PAK archives")

app.add_typer(
    pak.app, name="pak", help="Tools for PAK archives (.pak/.pab files)"
)

if __name__ == "__main__":
    app()
