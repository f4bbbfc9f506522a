from app import create_app
from store import COLLECTIONS, get_state

app = create_app()


def reset_state(keys):
    with app.app_context():
        state = get_state()
        if not keys:
            state.reset()
            print("✅ All collections restored to seed data.")
            return
        from seed_data import seed_collections

        seed = seed_collections()
        for key in keys:
            state.replace(key, seed[key])
            print(f"✅ {key}: {len(seed[key])} records")


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Restore stored shop collections to the seed dataset.')
    parser.add_argument('keys', nargs='*', help=f'Collections to reset (default: all): {", ".join(COLLECTIONS)}')

    args = parser.parse_args()
    unknown = set(args.keys) - set(COLLECTIONS)
    if unknown:
        parser.error(f'unknown collections: {", ".join(sorted(unknown))}')
    reset_state(args.keys)
