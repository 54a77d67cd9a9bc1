"""Tests for the training history table and plot."""

from graddesc.training import history_frame, plot_history


def fake_result():
    return {
        'loss_history': [0.5, 0.3, 0.2],
        'accuracy_history': [0.5, 0.75, 1.0],
    }

def test_history_frame_columns():
    df = history_frame(fake_result())
    assert list(df.columns) == ['epoch', 'avg_error', 'accuracy']
    assert df['epoch'].tolist() == [0, 1, 2]
    assert df['avg_error'].tolist() == [0.5, 0.3, 0.2]

def test_plot_history_saves_file(tmp_path, capsys):
    path = tmp_path / "curves.png"
    plot_history(fake_result(), save_path=str(path), test_accuracy=0.9)
    assert path.exists() and path.stat().st_size > 0
    assert "Figure saved to" in capsys.readouterr().out
