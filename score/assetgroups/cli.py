import click
import xxhash


@click.group()
def main():
    """
    Manages asset groups.
    """
    pass


@main.command('list')
@click.pass_context
def list_(clickctx):
    """
    Lists all configured groups.
    """
    assetgroups = clickctx.obj['conf'].load('assetgroups')
    for name in assetgroups.groups():
        print(name)


@main.command()
@click.option('--md5/--no-md5', default=None)
@click.argument('groups', nargs=-1, required=True)
@click.pass_context
def url(clickctx, groups, md5):
    """
    Provides group URLs.
    """
    assetgroups = clickctx.obj['conf'].load('assetgroups')
    for name in groups:
        print(assetgroups.url(name, md5=md5))


@main.command()
@click.argument('groups', nargs=-1, required=True)
@click.pass_context
def file(clickctx, groups):
    """
    Provides the output files of groups.
    """
    assetgroups = clickctx.obj['conf'].load('assetgroups')
    for name in groups:
        print('%s %s' % (name, assetgroups.file(name)))


@main.command()
@click.option('-f', '--force', 'force', is_flag=True)
@click.argument('groups', nargs=-1)
@click.pass_context
def build(clickctx, groups, force):
    """
    Writes the output files of stale groups.
    """
    assetgroups = clickctx.obj['conf'].load('assetgroups')
    if not groups:
        groups = assetgroups.groups()
    for name in groups:
        group = assetgroups.resolve_group(name, overwrite=force)
        if group.target_path:
            print('%s -> %s' % (name, group.target_path))
        else:
            print('%s (no output)' % name)


@main.command()
@click.pass_context
def fingerprint(clickctx):
    """
    Provides a stable value over the first assets of all groups.
    """
    assetgroups = clickctx.obj['conf'].load('assetgroups')
    hash = xxhash.xxh64()
    for name in assetgroups.groups():
        group = assetgroups.resolve_group(name)
        if group.assets:
            hash.update(group.assets[0].hash().encode('UTF-8'))
        hash.update(b'\0')
    print(hash.hexdigest())


if __name__ == '__main__':
    main()
