import functools
import logging
from datetime import date

import click

from .auth import AuthService, Session
from .config import ClientConfig
from .controller import SyncController
from .entries import EntryForm
from .errors import LogServiceError, NotFoundError, UnauthorizedError
from .http import ApiClient
from .local import LocalStore
from .remote import RemoteStore
from .storage import Storage


OFFLINE_BANNER = ('Offline mode active: changes are saved locally. '
                  'Run "learning-log retry" once the backend is reachable.')


# ----------------
# Helper Functions
# ----------------

class ClickHandler(logging.Handler):
    """Log records written to whatever stderr click is using right now."""

    def emit(self, record):
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose):
    logger = logging.getLogger('learning_log.client')
    if not any(isinstance(handler, ClickHandler) for handler in logger.handlers):
        handler = ClickHandler()
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)


def build_services(config):
    storage = Storage(config.storage_path)
    session = Session(storage)
    api = ApiClient(config.api_url, timeout=config.timeout, session=session)
    controller = SyncController(RemoteStore(api), LocalStore(storage), session=session)
    return controller, AuthService(api, session)


def show_entry(entry):
    tags = ' '.join(f'#{tag}' for tag in entry.tags)
    click.echo(f"{entry.date[:10]}  {click.style(entry.title, bold=True)}  {tags}".rstrip() + f"  ({entry.id})")
    for line in entry.content.splitlines() or ['']:
        click.echo(f'    {line}')
    if entry.image:
        click.echo('    [image attached]')


def show_mode(controller):
    if controller.is_offline:
        click.secho(OFFLINE_BANNER, fg='yellow', err=True)


# ----------
# Decorators
# ----------

def reports_errors(func):
    """Print failures instead of letting them escape the command."""
    @functools.wraps(func)
    def wrapper_reports_errors(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UnauthorizedError as e:
            click.secho(f'{e.message}\nPlease log in again with "learning-log login".', fg='red', err=True)
        except LogServiceError as e:
            click.secho(f'Error: {e.message}', fg='red', err=True)
        click.get_current_context().exit(1)
    return wrapper_reports_errors


# --------
# Commands
# --------

@click.group()
@click.option('--api-url', envvar='LEARNING_LOG_API_URL', help='Base URL of the Learning Log API.')
@click.option('--timeout', type=float, envvar='LEARNING_LOG_TIMEOUT', help='Seconds to wait for the API.')
@click.option('--storage', 'storage_path', type=click.Path(dir_okay=False), envvar='LEARNING_LOG_STORAGE',
              help='File holding the offline entries and the session.')
@click.option('-v', '--verbose', is_flag=True, help='Log what the client is doing.')
@click.pass_context
def cli(ctx, api_url, timeout, storage_path, verbose):
    """Keep a learning log, online or offline."""
    configure_logging(verbose)
    ctx.obj = ClientConfig(api_url=api_url, timeout=timeout, storage_path=storage_path)


@cli.command('list')
@click.pass_obj
@reports_errors
def list_entries(config):
    """Show all entries, newest first."""
    controller, _ = build_services(config)
    entries = controller.start()
    show_mode(controller)
    if not entries:
        click.echo('No entries yet. Add one with "learning-log new".')
    for entry in entries:
        show_entry(entry)


@cli.command('new')
@click.option('--title', prompt=True, help='What did you learn today?')
@click.option('--content', prompt=True, help='Details of the entry.')
@click.option('--tags', default='', help='Comma-separated tags.')
@click.option('--date', 'entry_date', default=lambda: date.today().isoformat(), help='Day of the entry (YYYY-MM-DD).')
@click.option('--image', default=None, help='Image reference (for example, a data URL).')
@click.pass_obj
@reports_errors
def new_entry(config, title, content, tags, entry_date, image):
    """Create a new entry."""
    controller, _ = build_services(config)
    controller.start()
    created = controller.create(EntryForm(title=title, content=content, tags=tags, date=entry_date, image=image))
    show_mode(controller)
    click.echo(f'Created entry {created.id}')


@cli.command('edit')
@click.argument('entry_id')
@click.option('--title', default=None)
@click.option('--content', default=None)
@click.option('--tags', default=None, help='Comma-separated tags.')
@click.option('--date', 'entry_date', default=None, help='Day of the entry (YYYY-MM-DD).')
@click.option('--image', default=None)
@click.pass_obj
@reports_errors
def edit_entry(config, entry_id, title, content, tags, entry_date, image):
    """Edit an entry; options left out keep their current value."""
    controller, _ = build_services(config)
    controller.start()

    entry = controller.find(entry_id)
    if entry is not None:
        form = EntryForm.from_entry(entry)
    elif None not in (title, content, entry_date):
        form = EntryForm(title=title, content=content, date=entry_date)
    else:
        raise NotFoundError(f'Entry {entry_id} was not found.')

    if title is not None:
        form.title = title
    if content is not None:
        form.content = content
    if tags is not None:
        form.tags = tags
    if entry_date is not None:
        form.date = entry_date
    if image is not None:
        form.image = image

    updated = controller.update(entry_id, form)
    show_mode(controller)
    click.echo(f'Updated entry {updated.id}')


@cli.command('delete')
@click.argument('entry_id')
@click.option('--yes', is_flag=True, help='Do not ask for confirmation.')
@click.pass_obj
@reports_errors
def delete_entry(config, entry_id, yes):
    """Delete an entry."""
    controller, _ = build_services(config)
    controller.start()
    if not yes:
        click.confirm('Are you sure you want to delete this log?', abort=True)
    controller.delete(entry_id)
    show_mode(controller)
    click.echo(f'Deleted entry {entry_id}')


@cli.command('retry')
@click.pass_obj
@reports_errors
def retry(config):
    """Try to reach the API again."""
    controller, _ = build_services(config)
    controller.retry()
    if controller.is_offline:
        show_mode(controller)
    else:
        click.echo(f'Online: {len(controller.entries)} entries on the server.')


@cli.command('login')
@click.argument('email')
@click.password_option(confirmation_prompt=False)
@click.pass_obj
@reports_errors
def login(config, email, password):
    """Log in to the API."""
    _, auth = build_services(config)
    user = auth.login(email, password)
    click.echo(f"Welcome back, {user.get('username', email)}!")


@cli.command('register')
@click.argument('username')
@click.argument('email')
@click.password_option()
@click.pass_obj
@reports_errors
def register(config, username, email, password):
    """Create an account on the API and log in."""
    _, auth = build_services(config)
    auth.register(username, email, password)
    click.echo(f'Account created for {email}.')


@cli.command('logout')
@click.pass_obj
@reports_errors
def logout(config):
    """Forget the stored session."""
    _, auth = build_services(config)
    auth.logout()
    click.echo('Logged out.')


@cli.command('whoami')
@click.pass_obj
def whoami(config):
    """Show the logged-in user."""
    _, auth = build_services(config)
    user = auth.current_user()
    if user is None:
        click.echo('Not logged in.')
    else:
        click.echo(f"{user.get('username')} <{user.get('email')}>")
