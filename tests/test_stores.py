def test_view_stores(stores, capsys):
    stores.view_stores()
    out = capsys.readouterr().out
    assert "store id: 1, address: 1 Main St, city: Riverside, state: CA, open status: yes, review score: 4.5" in out
    assert "store id: 2" in out
    assert "store id: 3" in out


def test_view_stores_empty(db, stores, capsys):
    db.execute_update("DELETE FROM Store;")
    stores.view_stores()
    assert "no stores available." in capsys.readouterr().out
